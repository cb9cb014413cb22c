"""DSPy signature for the course outline generator."""

from __future__ import annotations

import dspy


class DraftCourseOutline(dspy.Signature):
    """You are a professional curriculum designer and methodologist. Draft a detailed
    syllabus for the named course. Return only JSON of the form
    {"outline": [{"chapter": "...", "description": "..."}]}."""

    title = dspy.InputField(desc="Course title as typed by the operator.")
    category = dspy.InputField(desc="Course direction or subject area.")
    language = dspy.InputField(desc="Language every chapter title and description must be written in.")
    chapter_count = dspy.InputField(desc="Number of chapters to produce.")
    outline = dspy.OutputField(
        desc='JSON object {"outline": [{"chapter": str, "description": str}, ...]} with no prose around it.'
    )


__all__ = ["DraftCourseOutline"]
