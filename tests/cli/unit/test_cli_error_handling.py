"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from schema_materializer.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["validate", "--data", "/tmp/data.json"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--schema" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["convert", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "--bogus" in captured.err
    assert "Traceback" not in captured.err


def test_missing_payload_file_returns_cli_error(tmp_path: Path, capsys) -> None:
    exit_code = main(["convert", "--input", str(tmp_path / "missing.json")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Payload file not found" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_configuration_returns_cli_error(tmp_path: Path, capsys) -> None:
    payload_path = tmp_path / "payload.json"
    payload_path.write_text("{}", encoding="utf-8")
    config_path = tmp_path / "config.yaml"
    config_path.write_text("conversion:\n  max_depth: 0\n", encoding="utf-8")

    exit_code = main(["convert", "--input", str(payload_path), "--config", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "conversion.max_depth must be greater than zero." in captured.err


def test_generate_config_refuses_to_overwrite(tmp_path: Path, capsys) -> None:
    output_path = tmp_path / "schema-materializer.yaml"
    output_path.write_text("existing", encoding="utf-8")

    exit_code = main(["generate-config", "--output", str(output_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "already exists" in captured.err
    assert output_path.read_text(encoding="utf-8") == "existing"


def test_undecodable_payload_returns_cli_error(tmp_path: Path, capsys) -> None:
    payload_path = tmp_path / "payload.json"
    payload_path.write_bytes(b'{"a": "\xff"}')

    exit_code = main(["classify", "--input", str(payload_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Cannot read payload file" in captured.err
    assert "Traceback" not in captured.err


def test_directory_payload_returns_cli_error(tmp_path: Path, capsys) -> None:
    data_path = tmp_path / "data.json"
    data_path.write_text("{}", encoding="utf-8")

    exit_code = main(["validate", "--schema", str(tmp_path), "--data", str(data_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Cannot read payload file" in captured.err
    assert "Traceback" not in captured.err
