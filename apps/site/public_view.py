"""Read-only public view over the content state, plus the contact form."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Literal, Optional

from pydantic import BaseModel, Field

from edusite.core.models import DEFAULT_LANGUAGE, LANGUAGES, ContactMessage, Record
from edusite.sync import CollectionName, ContentState

LOGGER = logging.getLogger(__name__)

SENT_NOTICE = {"uz": "Xabar yuborildi!", "ru": "Сообщение отправлено!", "en": "Message sent!"}
FAILED_NOTICE = {
    "uz": "Xabarni yuborib bo'lmadi. Qaytadan urinib ko'ring.",
    "ru": "Не удалось отправить сообщение. Попробуйте ещё раз.",
    "en": "The message could not be sent. Please try again.",
}
INCOMPLETE_NOTICE = {
    "uz": "Barcha maydonlarni to'ldiring.",
    "ru": "Заполните все поля.",
    "en": "Please fill in every field.",
}
NEWS_LABEL = {"uz": "Yangilik", "ru": "Новость", "en": "News"}


@dataclass
class ContactForm:
    name: str = ""
    email: str = ""
    message: str = ""

    def is_complete(self) -> bool:
        return all(value.strip() for value in (self.name, self.email, self.message))

    def clear(self) -> None:
        self.name = ""
        self.email = ""
        self.message = ""


@dataclass
class Notice:
    level: Literal["success", "error"]
    text: str


class CardView(BaseModel):
    id: Optional[str] = None
    title: str = ""
    description: str = ""
    content: str = ""
    category: str = ""
    date: str = ""
    image: str = ""
    video_url: Optional[str] = None
    students: Optional[int] = None
    duration: Optional[str] = None


class StatView(BaseModel):
    label: str
    value: str


class SiteSnapshot(BaseModel):
    language: str
    courses: List[CardView] = Field(default_factory=list)
    news: List[CardView] = Field(default_factory=list)
    achievements: List[CardView] = Field(default_factory=list)
    stats: List[StatView] = Field(default_factory=list)
    contact: dict = Field(default_factory=dict)
    social_links: dict = Field(default_factory=dict)
    teacher_image: str = ""


def _resolve_language(lang: str | None) -> str:
    return lang if lang in LANGUAGES else DEFAULT_LANGUAGE


def _localized(record: Record, field: str, lang: str) -> str:
    value = getattr(record, field, None)
    if value is None:
        return ""
    return value.get(lang)


def card_view(record: Record, lang: str, *, kind: str = "course") -> CardView:
    """Resolve one record for ``lang``; content falls back to the description."""
    description = _localized(record, "description", lang)
    content = _localized(record, "content", lang) or description
    if kind == "course":
        category = _localized(record, "category", lang)
    elif kind == "news":
        category = NEWS_LABEL[lang]
    else:
        category = ""
    return CardView(
        id=record.id,
        title=_localized(record, "title", lang),
        description=description,
        content=content,
        category=category,
        date=getattr(record, "date", "") or "",
        image=getattr(record, "image", "") or "",
        video_url=getattr(record, "video_url", None),
        students=getattr(record, "students", None),
        duration=getattr(record, "duration", None),
    )


class PublicSite:
    def __init__(self, state: ContentState, *, clock: Callable[[], datetime] | None = None) -> None:
        self._state = state
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def snapshot(self, lang: str | None = None) -> SiteSnapshot:
        lang = _resolve_language(lang)
        state = self._state
        return SiteSnapshot(
            language=lang,
            courses=[card_view(record, lang, kind="course") for record in state.courses],
            news=[card_view(record, lang, kind="news") for record in state.news],
            achievements=[card_view(record, lang, kind="achievement") for record in state.achievements],
            stats=[StatView(label=label, value=value) for label, value in state.stats.pairs(lang)],
            contact=state.contact_info.model_dump(include={"address", "email", "phone"}),
            social_links=state.contact_info.social_links(),
            teacher_image=state.teacher_image,
        )

    def course_detail(self, course_id: str, lang: str | None = None) -> CardView | None:
        record = self._state.find(CollectionName.COURSES, course_id)
        return card_view(record, _resolve_language(lang), kind="course") if record else None

    def news_detail(self, news_id: str, lang: str | None = None) -> CardView | None:
        record = self._state.find(CollectionName.NEWS, news_id)
        return card_view(record, _resolve_language(lang), kind="news") if record else None

    async def submit_contact(self, form: ContactForm, lang: str | None = None) -> Notice:
        """Insert one message; the form is cleared only after the store confirms."""
        lang = _resolve_language(lang)
        if not form.is_complete():
            return Notice(level="error", text=INCOMPLETE_NOTICE[lang])
        draft = ContactMessage(
            name=form.name,
            email=form.email,
            message=form.message,
            date=self._clock().isoformat(),
        )
        result = await self._state.create(CollectionName.MESSAGES, draft)
        if not result.ok:
            LOGGER.warning("Contact message was not stored: %s", result.error)
            return Notice(level="error", text=FAILED_NOTICE[lang])
        form.clear()
        return Notice(level="success", text=SENT_NOTICE[lang])


__all__ = [
    "CardView",
    "ContactForm",
    "Notice",
    "PublicSite",
    "SiteSnapshot",
    "StatView",
    "card_view",
]
