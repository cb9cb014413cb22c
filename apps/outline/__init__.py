"""AI course outline generator."""

from .generator import (
    CourseOutline,
    OutlineChapter,
    OutlineGenerationError,
    OutlineGenerator,
    parse_outline,
)
from .runtime import OutlineConfigurationError, configure_outline_model

__all__ = [
    "CourseOutline",
    "OutlineChapter",
    "OutlineConfigurationError",
    "OutlineGenerationError",
    "OutlineGenerator",
    "configure_outline_model",
    "parse_outline",
]
