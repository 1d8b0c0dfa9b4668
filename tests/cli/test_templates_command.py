from __future__ import annotations

import json
import sys
import types
from enum import Enum
from pathlib import Path

import pytest
from typer.testing import CliRunner

from errata.cli.main import create_app


class ShopCode(str, Enum):
    OUT_OF_STOCK = "OUT_OF_STOCK"


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def templates(tmp_path: Path) -> Path:
    path = tmp_path / "messages.toml"
    path.write_text(
        "[en]\n"
        'GENERAL_ERROR = "Something went wrong."\n'
        'BAD_CONFIG = "Invalid configuration. File: {0}"\n'
        'VALIDATION_ERROR = "Invalid: {0}"\n'
        'DATA_FORMAT_ERROR = "Bad format: {0}"\n'
        'IO_ERROR = "Cannot access {0}."\n'
        'NOT_FOUND = "{0} was not found."\n'
        'DEPENDENCY_FAILURE = "Service unavailable."\n'
        'BATCH_THRESHOLD_NOT_MET = "Only {0} processed, need {1}."\n'
        "[es]\n"
        'BAD_CONFIG = "Configuración no válida. Archivo: {0}"\n',
        encoding="utf-8",
    )
    return path


def _read_jsonl(path: Path) -> list[dict[str, object]]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def test_validate_passes_for_complete_templates(runner: CliRunner, templates: Path, tmp_path: Path) -> None:
    output = tmp_path / "report.jsonl"

    result = runner.invoke(
        create_app(),
        ["--format", "jsonl", "--output", str(output), "templates", "validate", str(templates), "--locale", "fr"],
    )

    assert result.exit_code == 0, result.output
    rows = _read_jsonl(output)
    assert {row["locale"] for row in rows} == {"en", "es", "fr"}
    assert all(row["status"] == "ok" for row in rows)


def test_validate_table_output(runner: CliRunner, templates: Path) -> None:
    result = runner.invoke(create_app(), ["--no-color", "templates", "validate", str(templates)])

    assert result.exit_code == 0, result.output
    assert "BAD_CONFIG" in result.output
    assert "ok" in result.output


def test_validate_fails_for_application_codes_without_templates(
    runner: CliRunner, templates: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    module = types.ModuleType("shop_codes")
    module.ShopCode = ShopCode  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "shop_codes", module)
    output = tmp_path / "report.jsonl"

    result = runner.invoke(
        create_app(),
        ["-f", "jsonl", "-o", str(output), "templates", "validate", str(templates), "--codes", "shop_codes:ShopCode"],
    )

    assert result.exit_code == 2
    missing = [row for row in _read_jsonl(output) if row["status"] == "missing"]
    assert missing == [
        {"code": "OUT_OF_STOCK", "locale": "en", "status": "missing"},
        {"code": "OUT_OF_STOCK", "locale": "es", "status": "missing"},
    ]
    assert "MISSING_TEMPLATES" in result.output


def test_validate_rejects_bad_codes_reference(runner: CliRunner, templates: Path) -> None:
    result = runner.invoke(create_app(), ["templates", "validate", str(templates), "--codes", "no-colon"])

    assert result.exit_code != 0


def test_validate_reports_unreadable_file(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(create_app(), ["templates", "validate", str(tmp_path / "missing.toml")])

    assert result.exit_code == 2
    assert "TEMPLATE_FILE_ERROR" in result.output


def test_render_prints_localized_message(runner: CliRunner, templates: Path, tmp_path: Path) -> None:
    output = tmp_path / "render.jsonl"

    result = runner.invoke(
        create_app(),
        ["-f", "jsonl", "-o", str(output), "templates", "render", str(templates), "BAD_CONFIG", "-l", "es-AR", "-p", "app.ini"],
    )

    assert result.exit_code == 0, result.output
    assert _read_jsonl(output) == [
        {"code": "BAD_CONFIG", "locale": "es-AR", "message": "Configuración no válida. Archivo: app.ini"}
    ]


def test_render_reports_missing_params(runner: CliRunner, templates: Path) -> None:
    result = runner.invoke(create_app(), ["templates", "render", str(templates), "BAD_CONFIG"])

    assert result.exit_code == 2
    assert "TEMPLATE_ERROR" in result.output


def test_invalid_format_is_rejected(runner: CliRunner, templates: Path) -> None:
    result = runner.invoke(create_app(), ["--format", "xml", "templates", "validate", str(templates)])

    assert result.exit_code != 0


class ClashingCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"


def test_validate_reports_codes_clashing_with_builtin_values(
    runner: CliRunner, templates: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    module = types.ModuleType("clashing_codes")
    module.ClashingCode = ClashingCode  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "clashing_codes", module)

    result = runner.invoke(
        create_app(),
        ["templates", "validate", str(templates), "--codes", "clashing_codes:ClashingCode"],
    )

    assert result.exit_code == 2
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "DUPLICATE_ERROR_CODE" in result.output
