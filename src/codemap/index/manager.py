"""Refresh orchestration and the published index snapshot."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path

from codemap.config import CodemapConfig
from codemap.extract import DeclarationExtractor, build_extractor
from codemap.index.discovery import discover_source_files, read_source_text
from codemap.index.flat import flat_entries
from codemap.index.tree import FolderBuilder, build_type_nodes, count_files, count_types
from codemap.logging import AuditEvent, JsonlAuditLogger, utc_timestamp
from codemap.models import FileNode, FolderNode, IndexSnapshot
from codemap.render import (
    ReportWriteError,
    atomic_write_text,
    dumps_tree,
    render_compact,
    render_flat,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class IndexStatus:
    """Current index status."""

    index_status: str
    last_refresh_timestamp: str | None
    indexed_file_count: int
    indexed_type_count: int
    warning_count: int


class IndexService:
    """Owns the published snapshot; refresh() replaces it as a whole."""

    def __init__(
        self,
        config: CodemapConfig,
        audit_logger: JsonlAuditLogger | None = None,
        extractor: DeclarationExtractor | None = None,
    ) -> None:
        self._config = config
        self._extractor = extractor or build_extractor(config.index)
        self._audit_logger = audit_logger
        self._refresh_lock = threading.Lock()
        self._snapshot: IndexSnapshot | None = None

    @property
    def config(self) -> CodemapConfig:
        """Effective configuration."""
        return self._config

    @property
    def snapshot(self) -> IndexSnapshot | None:
        """Last published snapshot, or None before the first refresh."""
        return self._snapshot

    def status(self) -> IndexStatus:
        """Return status derived from the published snapshot."""
        snapshot = self._snapshot
        if snapshot is None:
            return IndexStatus(
                index_status="not_indexed",
                last_refresh_timestamp=None,
                indexed_file_count=0,
                indexed_type_count=0,
                warning_count=0,
            )
        return IndexStatus(
            index_status="ready",
            last_refresh_timestamp=snapshot.refreshed_at,
            indexed_file_count=snapshot.file_count,
            indexed_type_count=snapshot.type_count,
            warning_count=len(snapshot.warnings),
        )

    def refresh(self) -> IndexSnapshot:
        """Rescan the scripts root and publish a new snapshot."""
        with self._refresh_lock:
            start = time.perf_counter()
            snapshot = self._build_snapshot()
            self._snapshot = snapshot
            duration_ms = int((time.perf_counter() - start) * 1000)
        for warning in snapshot.warnings:
            logger.warning(warning)
        logger.info(
            "Code index refreshed: %d files, %d types, %d flat entries",
            snapshot.file_count,
            snapshot.type_count,
            len(snapshot.flat),
        )
        self._audit(
            "refresh",
            ok=True,
            error_code=None,
            metadata={
                "file_count": snapshot.file_count,
                "type_count": snapshot.type_count,
                "flat_entry_count": len(snapshot.flat),
                "warning_count": len(snapshot.warnings),
                "duration_ms": duration_ms,
            },
        )
        return snapshot

    def save_flat(self) -> Path:
        """Refresh, then write the flat listing as newline-delimited text."""
        snapshot = self.refresh()
        return self._export("save_flat", self._config.output.flat_file, render_flat(snapshot.flat))

    def save_json(self) -> Path:
        """Refresh, then write the hierarchy as pretty-printed JSON."""
        snapshot = self.refresh()
        return self._export("save_json", self._config.output.json_file, dumps_tree(snapshot.root))

    def save_compact(self) -> Path:
        """Refresh, then write the compact hierarchy report."""
        snapshot = self.refresh()
        return self._export(
            "save_compact", self._config.output.compact_file, render_compact(snapshot.root)
        )

    def _build_snapshot(self) -> IndexSnapshot:
        index_config = self._config.index
        scripts_root = self._config.scripts_root
        warnings: list[str] = []
        if not scripts_root.is_dir():
            warnings.append(f"Scripts folder not found: {scripts_root}")
            return _snapshot(FolderNode(name=index_config.root_name), [], warnings)

        builder = FolderBuilder(index_config.root_name)
        flat: list[str] = []
        for source in discover_source_files(scripts_root, index_config):
            try:
                text = read_source_text(source.full_path)
            except (OSError, UnicodeDecodeError) as error:
                warnings.append(f"Skipped unreadable file {source.relative_path}: {error}")
                continue
            logical_path = f"{index_config.scripts_dir}/{source.relative_path}"
            declarations = self._extractor.extract_declarations(text)
            for declaration in declarations:
                if not declaration.body_closed:
                    warnings.append(
                        f"No closing brace for '{declaration.name}' in {logical_path}; "
                        "members left empty."
                    )
            builder.insert_file(
                source.relative_path,
                FileNode(relative_path=logical_path, classes=build_type_nodes(declarations)),
            )
            flat.extend(
                flat_entries(
                    logical_path,
                    text,
                    self._extractor,
                    attribution=index_config.flat_attribution,
                )
            )
        return _snapshot(builder.freeze(), flat, warnings)

    def _export(self, operation: str, file_name: str, text: str) -> Path:
        target = self._config.output.data_dir / file_name
        try:
            atomic_write_text(target, text)
        except ReportWriteError as error:
            logger.error("%s", error)
            self._audit(
                operation,
                ok=False,
                error_code="REPORT_WRITE_FAILED",
                metadata={"path": str(target), "reason": error.reason},
            )
            raise
        logger.info("Saved %s to %s", operation.removeprefix("save_"), target)
        self._audit(
            operation,
            ok=True,
            error_code=None,
            metadata={"path": str(target), "bytes": len(text.encode("utf-8"))},
        )
        return target

    def _audit(
        self,
        operation: str,
        *,
        ok: bool,
        error_code: str | None,
        metadata: dict[str, object],
    ) -> None:
        if self._audit_logger is None:
            return
        self._audit_logger.append(
            AuditEvent(
                timestamp=utc_timestamp(),
                operation=operation,
                ok=ok,
                error_code=error_code,
                metadata=metadata,
            )
        )


def _snapshot(root: FolderNode, flat: list[str], warnings: list[str]) -> IndexSnapshot:
    return IndexSnapshot(
        root=root,
        flat=tuple(flat),
        warnings=tuple(warnings),
        refreshed_at=utc_timestamp(),
        file_count=count_files(root),
        type_count=count_types(root),
    )
