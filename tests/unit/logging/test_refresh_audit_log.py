from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from codemap.config import default_config
from codemap.index import IndexService
from codemap.logging import AuditEvent, JsonlAuditLogger


def _project(tmp_path: Path) -> Path:
    scripts = tmp_path / "Assets" / "Scripts"
    scripts.mkdir(parents=True)
    (scripts / "Player.cs").write_text(
        "public class Player : MonoBehaviour { public int hp; public void Heal() { } }\n",
        encoding="utf-8",
    )
    return tmp_path


def test_refresh_appends_jsonl_event(tmp_path: Path) -> None:
    project = _project(tmp_path)
    audit_path = tmp_path / ".codemap" / "audit.jsonl"
    service = IndexService(default_config(project), audit_logger=JsonlAuditLogger(audit_path))

    service.refresh()

    lines = audit_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])
    assert set(event.keys()) == {"error_code", "metadata", "ok", "operation", "timestamp"}
    assert event["operation"] == "refresh"
    assert event["ok"] is True
    assert event["error_code"] is None
    assert event["metadata"]["file_count"] == 1
    assert event["metadata"]["type_count"] == 1
    assert event["metadata"]["warning_count"] == 0


def test_reader_skips_malformed_lines_and_honours_limit(tmp_path: Path) -> None:
    logger = JsonlAuditLogger(tmp_path / "audit.jsonl")
    for index in range(3):
        logger.append(
            AuditEvent(
                timestamp=f"2026-01-0{index + 1}T00:00:00.000Z",
                operation="refresh",
                ok=True,
                error_code=None,
                metadata={"index": index},
            )
        )
    with logger.path.open("a", encoding="utf-8") as handle:
        handle.write("{not json\n\n")

    assert [entry["metadata"]["index"] for entry in logger.read(limit=2)] == [1, 2]
    assert [entry["metadata"]["index"] for entry in logger.read(since="2026-01-02")] == [1, 2]
    assert logger.read(limit=0) == []


def test_missing_root_warning_goes_to_module_logger(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    service = IndexService(default_config(tmp_path))

    with caplog.at_level(logging.WARNING, logger="codemap.index.manager"):
        service.refresh()

    assert any("Scripts folder not found" in record.getMessage() for record in caplog.records)
