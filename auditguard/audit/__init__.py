"""Audit: metadata stamping for pending changes. No storage engine."""

from auditguard.audit.visitor import AuditVisitor

__all__ = [
    "AuditVisitor",
]
