"""
Logging Setup

Modules log through ``logging.getLogger(__name__)``; this only installs the
root handler for applications embedding the engine.
"""

import logging

from admission_wizard.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger with the configured (or given) level."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )


def mask_rut(rut: str | None) -> str:
    """
    Mask a RUT for log output.

    Example: 12.345.678-5 -> ***678-5
    """
    if not rut:
        return ""
    compact = rut.replace(".", "").replace(" ", "")
    return f"***{compact[-5:]}" if len(compact) > 5 else "***"
