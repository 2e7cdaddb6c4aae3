"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from schema_materializer.cli import cli, main

_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_TOOL_CALL_PAYLOAD = _PROJECT_ROOT / "samples" / "tool-call-payload.json"

_LESSON_SCHEMA = {
    "type": "object",
    "title": "Lesson",
    "properties": {"name": {"type": "string"}, "emoji": {"type": "string"}},
    "required": ["name"],
    "additionalProperties": False,
}


def _write_json(path: Path, value: object) -> Path:
    path.write_text(json.dumps(value), encoding="utf-8")
    return path


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "schema-materializer.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0, result.output
    assert str(output_path.resolve()) in result.output
    assert "conversion:" in output_path.read_text(encoding="utf-8")


def test_classify_command_reports_score_and_signals(tmp_path: Path) -> None:
    runner = CliRunner()
    schema_path = _write_json(tmp_path / "schema.json", _LESSON_SCHEMA)

    result = runner.invoke(cli, ["classify", "--input", str(schema_path)])

    assert result.exit_code == 0, result.output
    report = json.loads(result.output)
    assert report["schema_like"] is True
    assert report["score"] == 4
    assert report["marker"] is False
    assert "object_coherence" in report["signals"]


def test_classify_command_reads_yaml(tmp_path: Path) -> None:
    runner = CliRunner()
    message_path = tmp_path / "message.yaml"
    message_path.write_text("role: user\ncontent: hi\n", encoding="utf-8")

    result = runner.invoke(cli, ["classify", "--input", str(message_path)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["schema_like"] is False


def test_convert_command_lists_materialized_locations(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "converted.json"

    result = runner.invoke(
        cli,
        ["convert", "--input", str(_TOOL_CALL_PAYLOAD), "--output", str(output_path)],
    )

    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert lines[0] == "$.schema\tSchemaValidator(object)"
    assert lines[-1] == str(output_path.resolve())

    source_payload = json.loads(_TOOL_CALL_PAYLOAD.read_text(encoding="utf-8"))
    written = json.loads(output_path.read_text(encoding="utf-8"))
    assert written["messages"] == source_payload["messages"]
    assert written["schema"] == {**source_payload["schema"], "isJsonSchema": True}


def test_convert_command_honours_configured_indent(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = tmp_path / "config.yaml"
    config_path.write_text("output:\n  indent: 0\n", encoding="utf-8")
    payload_path = _write_json(tmp_path / "payload.json", {"schema": _LESSON_SCHEMA})
    output_path = tmp_path / "converted.json"

    result = runner.invoke(
        cli,
        [
            "convert",
            "--input",
            str(payload_path),
            "--config",
            str(config_path),
            "--output",
            str(output_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "$.schema\tSchemaValidator(Lesson)" in result.output
    assert output_path.read_text(encoding="utf-8").startswith('{\n"schema": {\n"type"')


def test_validate_command_prints_parsed_data(tmp_path: Path) -> None:
    runner = CliRunner()
    schema_path = _write_json(tmp_path / "schema.json", _LESSON_SCHEMA)
    data_path = _write_json(tmp_path / "data.json", {"name": "Photosynthesis", "emoji": "🌱"})

    result = runner.invoke(
        cli, ["validate", "--schema", str(schema_path), "--data", str(data_path)]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output) == {"name": "Photosynthesis", "emoji": "🌱"}


def test_validate_command_reports_every_failure(tmp_path: Path, capsys) -> None:
    schema_path = _write_json(tmp_path / "schema.json", _LESSON_SCHEMA)
    data_path = _write_json(tmp_path / "data.json", {"emoji": 3, "extra": True})

    exit_code = main(["validate", "--schema", str(schema_path), "--data", str(data_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert captured.err.startswith("Validation failed:")
    assert "$.name: Field required" in captured.err
    assert "$.extra: Extra inputs are not permitted" in captured.err
    assert "Traceback" not in captured.err
