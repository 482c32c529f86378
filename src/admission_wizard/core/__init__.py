"""
Core module - Configuration, logging, HTTP client, notifications and RUT utilities.
"""

from admission_wizard.core.config import get_settings, settings
from admission_wizard.core.http import ApiClient, ApiError
from admission_wizard.core.logging_config import configure_logging
from admission_wizard.core.notifications import (
    CollectingNotifier,
    LoggingNotifier,
    Notification,
    NotificationLevel,
    Notifier,
)
from admission_wizard.core.rut import (
    calculate_verification_digit,
    clean_rut,
    format_rut,
    format_rut_input,
    is_valid_rut,
    validate_and_format_rut,
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    "configure_logging",
    # HTTP
    "ApiClient",
    "ApiError",
    # Notifications
    "Notifier",
    "Notification",
    "NotificationLevel",
    "LoggingNotifier",
    "CollectingNotifier",
    # RUT
    "clean_rut",
    "calculate_verification_digit",
    "is_valid_rut",
    "format_rut",
    "format_rut_input",
    "validate_and_format_rut",
]
