"""
Domain models — Pydantic types for envstrap.

    from envstrap.core.models import ExactLine, Receipt, BootstrapSettings
"""

from envstrap.core.models.action import InstallAction, Receipt
from envstrap.core.models.entry import (
    DesiredEntry,
    ExactLine,
    ListMembership,
    PatternedSetting,
)
from envstrap.core.models.settings import BootstrapSettings, CustomEntry

__all__ = [
    # settings.py
    "BootstrapSettings",
    "CustomEntry",
    # entry.py
    "DesiredEntry",
    "ExactLine",
    # action.py
    "InstallAction",
    "ListMembership",
    "PatternedSetting",
    "Receipt",
]
