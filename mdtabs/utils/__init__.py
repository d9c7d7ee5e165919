"""App constants and utilities."""

from .constants import (
    APP_NAME,
    APP_ORG,
    CSS_PREVIEW,
    ERROR_TEMPLATE,
    HTML_TEMPLATE,
    MAX_RECENTS,
    SETTINGS_GEOMETRY,
    SETTINGS_RECENTS,
    SETTINGS_TAB,
)
from .logging_setup import configure_logging

__all__ = [
    "APP_ORG",
    "APP_NAME",
    "CSS_PREVIEW",
    "ERROR_TEMPLATE",
    "HTML_TEMPLATE",
    "SETTINGS_GEOMETRY",
    "SETTINGS_TAB",
    "SETTINGS_RECENTS",
    "MAX_RECENTS",
    "configure_logging",
]
