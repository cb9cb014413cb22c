"""Shared context object handed to the backend routes and the CLI."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict

from apps.outline import OutlineGenerator
from apps.site import LoginGate, PublicSite
from apps.store import RemoteStoreClient
from edusite.core.config import SiteConfig
from edusite.core.preferences import LanguagePreference
from edusite.sync import ContentState


class SiteContext(BaseModel):
    """Aggregated runtime context; both views hold the same ``state``."""

    config: SiteConfig
    repo_root: Path
    store: RemoteStoreClient
    state: ContentState
    preferences: LanguagePreference
    gate: LoginGate
    generator: OutlineGenerator
    public: PublicSite

    model_config = ConfigDict(arbitrary_types_allowed=True)

    async def aclose(self) -> None:
        await self.store.aclose()
