"""Server-rendered pages built from markupsafe components."""
from .router import router

__all__ = ["router"]
