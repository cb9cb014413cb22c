"""
Core package for the education center content site.

Entities, seed data, configuration and the content state store live here so
the HTTP backend and the operator CLI share one implementation.
"""

from importlib import metadata


def get_version() -> str:
    """Return the installed project version."""
    try:
        return metadata.version("edusite")
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
