"""Monitoring exports."""

from stock_advisor.monitoring.audit import AuditLog

__all__ = ["AuditLog"]
