"""
Foundational configuration, entity models and seed data for the content site.
"""

from .config import SiteConfig, StoreConfig, load_site_config
from .models import (
    Achievement,
    ContactInfo,
    ContactMessage,
    Course,
    CourseEnrollment,
    GlobalStats,
    LocalizedText,
    NewsItem,
)
from .preferences import LanguagePreference

__all__ = [
    "Achievement",
    "ContactInfo",
    "ContactMessage",
    "Course",
    "CourseEnrollment",
    "GlobalStats",
    "LanguagePreference",
    "LocalizedText",
    "NewsItem",
    "SiteConfig",
    "StoreConfig",
    "load_site_config",
]
