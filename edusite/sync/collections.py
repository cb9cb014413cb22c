"""Registry of the mirrored collections and how each one is read."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Type

from apps.store import Order
from edusite.core import seeds
from edusite.core.models import (
    Achievement,
    ContactMessage,
    Course,
    CourseEnrollment,
    NewsItem,
    Record,
)

SINGLETON_ROW_ID = 1


class CollectionName(str, Enum):
    COURSES = "courses"
    NEWS = "news"
    ACHIEVEMENTS = "achievements"
    MESSAGES = "messages"
    ENROLLMENTS = "enrollments"


class SingletonName(str, Enum):
    STATS = "global_stats"
    CONTACT_INFO = "contact_info"
    TEACHER_IMAGE = "teacher_profile"


@dataclass(frozen=True)
class CollectionDef:
    name: CollectionName
    table: str
    model: Type[Record]
    order: Order | None
    seed: Callable[[], List[Record]]


def _no_seed() -> List[Record]:
    return []


COLLECTIONS: Dict[CollectionName, CollectionDef] = {
    CollectionName.COURSES: CollectionDef(
        CollectionName.COURSES, "courses", Course, Order("id"), seeds.seed_courses
    ),
    CollectionName.NEWS: CollectionDef(
        CollectionName.NEWS, "news", NewsItem, Order("date"), seeds.seed_news
    ),
    CollectionName.ACHIEVEMENTS: CollectionDef(
        CollectionName.ACHIEVEMENTS, "achievements", Achievement, None, seeds.seed_achievements
    ),
    CollectionName.MESSAGES: CollectionDef(
        CollectionName.MESSAGES, "messages", ContactMessage, Order("date"), _no_seed
    ),
    CollectionName.ENROLLMENTS: CollectionDef(
        CollectionName.ENROLLMENTS, "enrollments", CourseEnrollment, Order("date"), _no_seed
    ),
}


def get_collection(name: CollectionName | str) -> CollectionDef:
    try:
        return COLLECTIONS[CollectionName(name)]
    except ValueError as exc:
        raise KeyError(f"Unknown collection '{name}'") from exc


__all__ = [
    "COLLECTIONS",
    "CollectionName",
    "CollectionDef",
    "SINGLETON_ROW_ID",
    "SingletonName",
    "get_collection",
]
