from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from clubsync.domain.reconciliation import BatchResult
from clubsync.ui import cli as cli_module
from tests.helpers.ledger import make_record

if TYPE_CHECKING:
    from pathlib import Path


def test_cli_reconcile_passes_dry_run(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_reconcile(**kwargs: object) -> BatchResult:
        captured.update(kwargs)
        return BatchResult()

    monkeypatch.setattr(cli_module, "reconcile_ledger", fake_reconcile)

    cli_module.main(["reconcile", "--dry-run"])

    assert captured == {"dry_run": True}


def test_cli_ledger_load_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["ledger-load", str(tmp_path / "missing.csv")])

    assert excinfo.value.code == 2


def test_cli_ledger_load_passes_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "ledger.csv"
    path.write_text("First Name\n", encoding="utf-8")
    captured: list[Path] = []

    def fake_load(value: Path) -> int:
        captured.append(value)
        return 0

    monkeypatch.setattr(cli_module, "load_ledger_file", fake_load)

    cli_module.main(["ledger-load", str(path)])

    assert captured == [path]


def test_cli_runtime_error_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_check() -> None:
        raise RuntimeError("directory unreachable")

    monkeypatch.setattr(cli_module, "check_expirations", fake_check)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["check-expirations"])

    assert excinfo.value.code == 1


def test_cli_report_writes_csv(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    output = tmp_path / "report.csv"
    monkeypatch.setattr(cli_module, "membership_report", lambda: [make_record().report()])

    cli_module.main(["report", "--output", str(output)])

    lines = output.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("primary,email,phone")
    assert lines[1].startswith("jane.kane@club.example.org")


def test_cli_requires_a_command() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2
