"""Expose reusable UI components."""
from __future__ import annotations

from . import cards, feed, feedback, layout, modal, profile

__all__ = [
    "cards",
    "feed",
    "feedback",
    "layout",
    "modal",
    "profile",
]
