"""Course outline drafts produced by a DSPy program."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, List

import dspy
from pydantic import BaseModel, Field, ValidationError

from edusite.core.config import OutlineModelConfig
from edusite.core.models import DEFAULT_LANGUAGE

from .runtime import OutlineConfigurationError, configure_outline_model
from .signatures import DraftCourseOutline

LOGGER = logging.getLogger(__name__)

LANGUAGE_NAMES = {"uz": "Uzbek", "ru": "Russian", "en": "English"}
_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class OutlineChapter(BaseModel):
    chapter: str = Field(..., min_length=1)
    description: str = ""


class CourseOutline(BaseModel):
    outline: List[OutlineChapter] = Field(default_factory=list)


class OutlineGenerationError(RuntimeError):
    """The whole generation attempt failed; there is no partial outline."""


def build_outline_program() -> Callable[..., Any]:
    return dspy.Predict(DraftCourseOutline)


def parse_outline(raw: Any, *, min_chapters: int = 5) -> CourseOutline:
    """Validate the model output into a ``CourseOutline``."""
    if isinstance(raw, str):
        text = _FENCE.sub("", raw.strip())
        try:
            raw = json.loads(text)
        except ValueError as exc:
            raise OutlineGenerationError("Outline response was not valid JSON") from exc
    if isinstance(raw, list):
        raw = {"outline": raw}
    try:
        outline = CourseOutline.model_validate(raw)
    except ValidationError as exc:
        raise OutlineGenerationError("Outline response did not match the expected schema") from exc
    if len(outline.outline) < min_chapters:
        raise OutlineGenerationError(
            f"Outline has {len(outline.outline)} chapters; at least {min_chapters} are required"
        )
    return outline


class OutlineGenerator:
    def __init__(
        self,
        config: OutlineModelConfig,
        *,
        program: Callable[..., Any] | None = None,
        lm: object | None = None,
    ) -> None:
        self._config = config
        self._program = program
        self._lm = lm

    def generate(self, title: str, category: str = "", language: str = DEFAULT_LANGUAGE) -> CourseOutline:
        title = (title or "").strip()
        if not title:
            raise ValueError("Course title is required to draft an outline")
        category = (category or "").strip() or self._config.default_category
        language_name = LANGUAGE_NAMES.get(language, LANGUAGE_NAMES[DEFAULT_LANGUAGE])

        try:
            program = self._ensure_program()
            kwargs = {
                "title": title,
                "category": category,
                "language": language_name,
                "chapter_count": str(self._config.requested_chapters),
            }
            if self._lm is not None:
                with dspy.context(lm=self._lm):
                    prediction = program(**kwargs)
            else:
                prediction = program(**kwargs)
        except OutlineConfigurationError as exc:
            raise OutlineGenerationError(str(exc)) from exc
        except Exception as exc:
            LOGGER.error("Outline generation failed for %r: %s", title, exc)
            raise OutlineGenerationError("The AI service could not draft an outline") from exc

        raw = getattr(prediction, "outline", prediction)
        outline = parse_outline(raw, min_chapters=self._config.min_chapters)
        LOGGER.info("Drafted outline", extra={"title": title, "chapters": len(outline.outline)})
        return outline

    def _ensure_program(self) -> Callable[..., Any]:
        if self._program is None:
            if self._lm is None:
                self._lm = configure_outline_model(self._config)
            self._program = build_outline_program()
        return self._program


__all__ = [
    "CourseOutline",
    "OutlineChapter",
    "OutlineGenerationError",
    "OutlineGenerator",
    "build_outline_program",
    "parse_outline",
]
