"""Launch named commands declared in a runner file."""

from __future__ import annotations

__version__ = "0.1.0"
