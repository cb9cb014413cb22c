from __future__ import annotations

from pathlib import Path

import pytest

from apps.store import RemoteStoreClient, RemoteStoreConfig
from edusite.core.config import SiteConfig
from edusite.sync import ContentState
from tests.mocks.remote_store import FakeTableService


@pytest.fixture()
def service() -> FakeTableService:
    return FakeTableService()


@pytest.fixture()
def store(service: FakeTableService) -> RemoteStoreClient:
    return RemoteStoreClient(
        RemoteStoreConfig(base_url=service.base_url, api_key=service.api_key),
        client=service.build_client(),
    )


@pytest.fixture()
def state(store: RemoteStoreClient) -> ContentState:
    return ContentState(store)


@pytest.fixture()
def site_config(tmp_path: Path) -> SiteConfig:
    return SiteConfig.model_validate(
        {
            "store": {"base_url": "https://store.test", "api_key": "anon-key"},
            "admin": {"username": "admin", "password": "s3cret", "login_delay_seconds": 0},
            "preferences": {"path": str(tmp_path / "preferences.json")},
        }
    )
