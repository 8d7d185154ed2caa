"""Audit logging package."""

from housesplit.audit.logger import (
    AuditLogger,
    AuditSinkInterface,
    InMemoryAuditSink,
    configure_logging,
    create_correlation_id,
)

__all__ = [
    "AuditLogger",
    "AuditSinkInterface",
    "InMemoryAuditSink",
    "configure_logging",
    "create_correlation_id",
]
