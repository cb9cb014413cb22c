"""Admin console: the authenticated writer of every content collection."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from apps.outline import CourseOutline, OutlineGenerationError, OutlineGenerator
from edusite.core.models import (
    DEFAULT_LANGUAGE,
    Achievement,
    ContactInfo,
    Course,
    GlobalStats,
    LocalizedText,
    NewsItem,
)
from edusite.sync import CollectionName, ContentState, MutationResult

from .auth import LoginGate

LOGGER = logging.getLogger(__name__)

DEFAULT_DRAFT_DATE = "2024"
SAVE_FAILED_NOTICE = "Saqlab bo'lmadi. Qaytadan urinib ko'ring."
OUTLINE_FAILED_NOTICE = "AI javob bera olmadi."
OUTLINE_TITLE_REQUIRED = "Kurs nomini kiriting."


@dataclass
class OutlineResult:
    outline: CourseOutline | None = None
    notice: str | None = None

    @property
    def ok(self) -> bool:
        return self.outline is not None


def new_course_draft() -> Course:
    return Course(content=LocalizedText())


def new_news_draft() -> NewsItem:
    return NewsItem(date=DEFAULT_DRAFT_DATE, image="")


def new_achievement_draft() -> Achievement:
    return Achievement(date=DEFAULT_DRAFT_DATE)


class AdminConsole:
    def __init__(
        self,
        state: ContentState,
        gate: LoginGate,
        token: str,
        *,
        generator: OutlineGenerator | None = None,
    ) -> None:
        gate.require(token)
        self._state = state
        self._gate = gate
        self._token = token
        self._generator = generator

    def _authorized(self) -> ContentState:
        self._gate.require(self._token)
        return self._state

    def logout(self) -> None:
        self._gate.logout(self._token)

    def dashboard(self) -> Dict[str, int]:
        state = self._authorized()
        return {
            "courses": len(state.courses),
            "enrollments": len(state.enrollments),
            "messages": len(state.messages),
            "news": len(state.news),
        }

    # courses / news / achievements -------------------------------------

    async def add_course(self, draft: Course | Mapping[str, Any]) -> MutationResult:
        return self._report(await self._authorized().create(CollectionName.COURSES, draft))

    async def update_course(self, course: Course | Mapping[str, Any]) -> MutationResult:
        return self._report(await self._authorized().update(CollectionName.COURSES, course))

    async def delete_course(self, course_id: str) -> MutationResult:
        # enrollments keep their courseId and title snapshot
        return self._report(await self._authorized().delete(CollectionName.COURSES, course_id))

    async def add_news(self, draft: NewsItem | Mapping[str, Any]) -> MutationResult:
        return self._report(await self._authorized().create(CollectionName.NEWS, draft))

    async def update_news(self, item: NewsItem | Mapping[str, Any]) -> MutationResult:
        return self._report(await self._authorized().update(CollectionName.NEWS, item))

    async def delete_news(self, news_id: str) -> MutationResult:
        return self._report(await self._authorized().delete(CollectionName.NEWS, news_id))

    async def add_achievement(self, draft: Achievement | Mapping[str, Any]) -> MutationResult:
        return self._report(await self._authorized().create(CollectionName.ACHIEVEMENTS, draft))

    async def update_achievement(self, item: Achievement | Mapping[str, Any]) -> MutationResult:
        return self._report(await self._authorized().update(CollectionName.ACHIEVEMENTS, item))

    async def delete_achievement(self, achievement_id: str) -> MutationResult:
        return self._report(await self._authorized().delete(CollectionName.ACHIEVEMENTS, achievement_id))

    # inbox ---------------------------------------------------------------

    async def delete_message(self, message_id: str) -> MutationResult:
        return self._report(await self._authorized().delete(CollectionName.MESSAGES, message_id))

    async def delete_enrollment(self, enrollment_id: str) -> MutationResult:
        return self._report(await self._authorized().delete(CollectionName.ENROLLMENTS, enrollment_id))

    # singletons ------------------------------------------------------------

    async def update_contact_info(self, info: ContactInfo | Mapping[str, Any]) -> MutationResult:
        return self._report(await self._authorized().update_contact_info(info))

    async def update_stats(self, stats: GlobalStats | Mapping[str, Any]) -> MutationResult:
        return self._report(await self._authorized().update_stats(stats))

    async def update_teacher_image(self, image_url: str) -> MutationResult:
        return self._report(await self._authorized().update_teacher_image(image_url))

    # AI tools ----------------------------------------------------------------

    async def generate_outline(
        self,
        title: str,
        category: str = "",
        language: str = DEFAULT_LANGUAGE,
    ) -> OutlineResult:
        """Draft a syllabus; a blank title never reaches the generator."""
        self._authorized()
        if not (title or "").strip():
            return OutlineResult(notice=OUTLINE_TITLE_REQUIRED)
        if self._generator is None:
            return OutlineResult(notice=OUTLINE_FAILED_NOTICE)
        try:
            outline = await asyncio.to_thread(self._generator.generate, title, category, language)
        except OutlineGenerationError as exc:
            LOGGER.warning("Outline generation failed: %s", exc)
            return OutlineResult(notice=OUTLINE_FAILED_NOTICE)
        return OutlineResult(outline=outline)

    @staticmethod
    def _report(result: MutationResult) -> MutationResult:
        if not result.ok and result.error and SAVE_FAILED_NOTICE not in result.error:
            result.error = f"{SAVE_FAILED_NOTICE} ({result.error})"
        return result


__all__ = [
    "AdminConsole",
    "OutlineResult",
    "new_achievement_draft",
    "new_course_draft",
    "new_news_draft",
]
