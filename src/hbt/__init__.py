"""hbt: a local, single-user habit tracker with streaks and statistics."""

from __future__ import annotations

from .config import BaseConfig
from .context import AppContext, create_app_context

__all__ = ["AppContext", "BaseConfig", "create_app_context"]

__version__ = "0.1.0"
