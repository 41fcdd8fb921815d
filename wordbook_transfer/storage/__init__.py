"""Storage layer implementations of the vocabulary port."""

from .memory_store import InMemoryVocabularyStore

__all__ = ["InMemoryVocabularyStore"]
