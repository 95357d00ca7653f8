"""Observability module for audit logging."""

from skills_npm.observability.audit import (
    AuditSink,
    JSONLAuditSink,
    MemoryAuditSink,
    StdoutAuditSink,
    emit,
)

__all__ = ["AuditSink", "JSONLAuditSink", "MemoryAuditSink", "StdoutAuditSink", "emit"]
