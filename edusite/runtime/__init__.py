"""Runtime bootstrap for the content site."""

from __future__ import annotations

from .bootstrap import bootstrap_site
from .context import SiteContext

__all__ = ["SiteContext", "bootstrap_site"]
