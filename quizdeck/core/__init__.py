"""Core app configuration and database."""

from quizdeck.core.config import get_settings, settings
from quizdeck.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
