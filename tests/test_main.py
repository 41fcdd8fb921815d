import json
import logging

import pytest

from wordbook_transfer import main as entrypoint
from wordbook_transfer.logging_config import LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated_logging(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("LOG_LEVEL", "CRITICAL")
    yield
    for name in (LOGGER_NAME, "py.warnings"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
    logging.captureWarnings(False)


def test_template_command_writes_file(tmp_path, capsys):
    output = tmp_path / "out" / "chapter.csv"

    assert entrypoint.main(["template", "csv", "chapter", str(output)]) == 0
    assert capsys.readouterr().out.strip() == f"TEMPLATE_OK {output}"
    assert output.read_text(encoding="utf-8").startswith("source\ttranslation\tnote\n")


def test_check_command_prints_summary(tmp_path, capsys):
    source = tmp_path / "words.tsv"
    source.write_text("h\nUnit 1\tcat\tchat\nUnit 2\tdog\tchien\n", encoding="utf-8")

    assert entrypoint.main(["check", str(source)]) == 0
    assert capsys.readouterr().out.strip() == "CHECK_OK chapters=2 words=2"


def test_convert_command_rewrites_in_output_format(tmp_path, capsys):
    source = tmp_path / "animals.csv"
    source.write_text("source\ttranslation\ncat\tchat\n", encoding="utf-8")
    output = tmp_path / "animals.json"

    code = entrypoint.main(
        ["convert", str(source), str(output), "--target", "chapter", "--name", "Animals"]
    )

    assert code == 0
    assert capsys.readouterr().out.strip() == f"CONVERT_OK {output} chapters=1 words=1"
    assert json.loads(output.read_text(encoding="utf-8")) == {
        "name": "Animals",
        "words": [{"source": "cat", "translation": "chat"}],
    }


def test_invalid_input_exits_with_transfer_error(tmp_path, capsys):
    source = tmp_path / "broken.json"
    source.write_text("{", encoding="utf-8")

    assert entrypoint.main(["check", str(source)]) == 2
    assert capsys.readouterr().err.startswith("ERROR: Parse error:")


def test_missing_input_and_unsupported_output_are_reported(tmp_path, capsys):
    assert entrypoint.main(["check", str(tmp_path / "absent.json")]) == 2
    assert "ERROR: IO error:" in capsys.readouterr().err

    source = tmp_path / "words.tsv"
    source.write_text("h\nUnit\tcat\tchat\n", encoding="utf-8")
    assert entrypoint.main(["convert", str(source), str(tmp_path / "words.pdf")]) == 2
    assert "Unsupported format: pdf" in capsys.readouterr().err


def test_unexpected_errors_exit_with_one(monkeypatch, tmp_path):
    def explode(*_args, **_kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(entrypoint, "_run", explode)
    assert entrypoint.main(["template", "json", "wordbook", str(tmp_path / "t.json")]) == 1


def test_parser_rejects_unknown_template_format(tmp_path):
    with pytest.raises(SystemExit):
        entrypoint.main(["template", "pdf", "wordbook", str(tmp_path / "t.pdf")])
