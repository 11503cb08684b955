"""Export page routers for composition."""
from __future__ import annotations

from . import home, post, profile

__all__ = [
    "home",
    "post",
    "profile",
]
