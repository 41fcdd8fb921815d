"""Configuration loading from environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .utils import env_text, parse_flag_env, parse_int_env, resolve_path

LOGGER_NAME = "wordbook_transfer"
DEFAULT_WORDBOOK_NAME = "Imported Wordbook"
DEFAULT_CHAPTER_NAME = "Imported Chapter"


@dataclass(frozen=True)
class AppConfig:
    log_level: str
    file_log_level: str
    log_dir: str
    log_file: str
    default_wordbook_name: str = DEFAULT_WORDBOOK_NAME
    default_chapter_name: str = DEFAULT_CHAPTER_NAME
    csv_export_bom: bool = False
    json_indent: int = 2


def load_config() -> AppConfig:
    base_dir = str(Path(__file__).resolve().parents[1])
    log_level = env_text("LOG_LEVEL", "INFO").upper()
    file_log_level = env_text("FILE_LOG_LEVEL", "DEBUG").upper()
    log_dir = resolve_path(env_text("LOG_DIR", "logs"), base_dir)
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(
        log_dir, f"{LOGGER_NAME}_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.log"
    )
    default_wordbook_name = env_text("DEFAULT_WORDBOOK_NAME", DEFAULT_WORDBOOK_NAME)
    default_chapter_name = env_text("DEFAULT_CHAPTER_NAME", DEFAULT_CHAPTER_NAME)
    csv_export_bom = parse_flag_env("CSV_EXPORT_BOM", "0")
    json_indent = parse_int_env("JSON_INDENT", 2, min_value=0, max_value=8)
    return AppConfig(
        log_level=log_level,
        file_log_level=file_log_level,
        log_dir=log_dir,
        log_file=log_file,
        default_wordbook_name=default_wordbook_name,
        default_chapter_name=default_chapter_name,
        csv_export_bom=csv_export_bom,
        json_indent=json_indent,
    )
