"""Entity models shared by the state store, the views and the backend."""

from __future__ import annotations

from typing import Any, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

Language = Literal["uz", "ru", "en"]
LANGUAGES: Tuple[str, ...] = ("uz", "ru", "en")
DEFAULT_LANGUAGE: Language = "uz"


class LocalizedText(BaseModel):
    """Three-way mapping of language code to text; other keys ride along untouched."""

    model_config = ConfigDict(extra="allow")

    uz: str = ""
    ru: str = ""
    en: str = ""

    @field_validator("uz", "ru", "en", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def same(cls, text: str) -> "LocalizedText":
        return cls(uz=text, ru=text, en=text)

    @classmethod
    def coerce(cls, value: Any) -> Any:
        """Accept the plain strings older rows carry."""
        if isinstance(value, str):
            return {"uz": value, "ru": value, "en": value}
        return value

    def get(self, lang: str) -> str:
        if lang not in LANGUAGES:
            return ""
        return getattr(self, lang)


class SiteModel(BaseModel):
    """Wire models keep camelCase aliases and any extra server columns."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @field_validator("*", mode="before")
    @classmethod
    def null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        # nullable columns come back as null; required text becomes ""
        if value is not None or info.field_name is None:
            return value
        field = cls.model_fields[info.field_name]
        if field.is_required():
            return ""
        return field.get_default(call_default_factory=True)

    def to_wire(self, *, exclude_id: bool = True) -> dict[str, Any]:
        exclude = {"id"} if exclude_id else set()
        return self.model_dump(by_alias=True, exclude=exclude, mode="json")


class Record(SiteModel):
    """An independently keyed row; ids are assigned by the remote store."""

    id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class Course(Record):
    title: LocalizedText = Field(default_factory=LocalizedText)
    description: LocalizedText = Field(default_factory=LocalizedText)
    content: Optional[LocalizedText] = None
    category: LocalizedText = Field(default_factory=LocalizedText)
    students: int = 0
    duration: str = ""
    image: str = ""

    @field_validator("title", "description", "content", "category", mode="before")
    @classmethod
    def localize(cls, value: Any) -> Any:
        return LocalizedText.coerce(value)


class NewsItem(Record):
    title: LocalizedText = Field(default_factory=LocalizedText)
    description: LocalizedText = Field(default_factory=LocalizedText)
    content: LocalizedText = Field(default_factory=LocalizedText)
    date: str = ""
    image: str = ""
    video_url: Optional[str] = Field(default=None, alias="videoUrl")

    @field_validator("title", "description", "content", mode="before")
    @classmethod
    def localize(cls, value: Any) -> Any:
        if value is None:
            return {}
        return LocalizedText.coerce(value)


class Achievement(Record):
    title: LocalizedText = Field(default_factory=LocalizedText)
    description: LocalizedText = Field(default_factory=LocalizedText)
    content: Optional[LocalizedText] = None
    date: str = ""

    @field_validator("title", "description", "content", mode="before")
    @classmethod
    def localize(cls, value: Any) -> Any:
        return LocalizedText.coerce(value)


class ContactMessage(Record):
    name: str
    email: str
    message: str
    date: str = ""


class CourseEnrollment(Record):
    # weak reference: the course may have been deleted since submission
    course_id: Optional[str] = Field(default=None, alias="courseId")
    course_title: str = Field(default="", alias="courseTitle")
    student_name: str = Field(default="", alias="studentName")
    student_phone: str = Field(default="", alias="studentPhone")
    date: str = ""

    @field_validator("course_id", mode="before")
    @classmethod
    def normalize_course_id(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)


class GlobalStats(SiteModel):
    stat1_label: LocalizedText = Field(default_factory=LocalizedText, alias="stat1Label")
    stat1_value: str = Field(default="", alias="stat1Value")
    stat2_label: LocalizedText = Field(default_factory=LocalizedText, alias="stat2Label")
    stat2_value: str = Field(default="", alias="stat2Value")
    stat3_label: LocalizedText = Field(default_factory=LocalizedText, alias="stat3Label")
    stat3_value: str = Field(default="", alias="stat3Value")
    stat4_label: LocalizedText = Field(default_factory=LocalizedText, alias="stat4Label")
    stat4_value: str = Field(default="", alias="stat4Value")

    @field_validator("stat1_label", "stat2_label", "stat3_label", "stat4_label", mode="before")
    @classmethod
    def localize(cls, value: Any) -> Any:
        return LocalizedText.coerce(value)

    def pairs(self, lang: str) -> list[tuple[str, str]]:
        """Return the four (label, value) pairs resolved for ``lang``."""
        return [
            (self.stat1_label.get(lang), self.stat1_value),
            (self.stat2_label.get(lang), self.stat2_value),
            (self.stat3_label.get(lang), self.stat3_value),
            (self.stat4_label.get(lang), self.stat4_value),
        ]


class ContactInfo(SiteModel):
    address: str = ""
    email: str = ""
    phone: str = ""
    instagram: str = ""
    telegram: str = ""
    youtube: str = ""
    facebook: str = ""

    def social_links(self) -> dict[str, str]:
        return {
            "instagram": self.instagram,
            "telegram": self.telegram,
            "youtube": self.youtube,
            "facebook": self.facebook,
        }


__all__ = [
    "Achievement",
    "ContactInfo",
    "ContactMessage",
    "Course",
    "CourseEnrollment",
    "DEFAULT_LANGUAGE",
    "GlobalStats",
    "LANGUAGES",
    "Language",
    "LocalizedText",
    "NewsItem",
    "Record",
    "SiteModel",
]
