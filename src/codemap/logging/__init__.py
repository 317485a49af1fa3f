"""Structured logging utilities."""

from .audit import AuditEvent, JsonlAuditLogger, utc_timestamp

__all__ = ["AuditEvent", "JsonlAuditLogger", "utc_timestamp"]
