"""
Service layer for the Rakshak portal backend.

This package holds the logic shared by the routers: reference number
allocation, status transitions and notification writes.
"""

from .case_lifecycle import change_alert_status, change_complaint_status, change_fir_status
from .notifications import create_notification

__all__ = [
    "change_alert_status",
    "change_complaint_status",
    "change_fir_status",
    "create_notification",
]
