"""Bootstrap helpers for the content site runtime."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Callable

import httpx
from dotenv import load_dotenv

from apps.outline import OutlineGenerator
from apps.site import LoginGate, PublicSite
from apps.store import RemoteStoreClient, RemoteStoreConfig
from edusite.core.config import SiteConfig, load_site_config
from edusite.core.preferences import LanguagePreference
from edusite.sync import ContentState

from .context import SiteContext

DEFAULT_CONFIG_PATH = Path("config/site.yaml")
CONFIG_ENV = "EDUSITE_CONFIG"
LOGGER = logging.getLogger(__name__)


def bootstrap_site(
    config_path: Path | None = None,
    *,
    repo_root: Path | None = None,
    config: SiteConfig | None = None,
    http_client: httpx.AsyncClient | None = None,
    outline_program: Callable[..., Any] | None = None,
) -> SiteContext:
    """
    Load configuration and environment variables and wire the site context.

    Parameters
    ----------
    config_path:
        Path to the site YAML. Defaults to ``$EDUSITE_CONFIG`` or
        ``config/site.yaml`` under ``repo_root``.
    repo_root:
        Root of the repository. Defaults to ``Path.cwd()``.
    config:
        Pre-built config; skips the YAML entirely.
    http_client:
        Optional ``httpx.AsyncClient`` for the table service (tests pass a
        client backed by ``httpx.MockTransport``).
    outline_program:
        Optional DSPy program override for the outline generator.
    """

    repo_root = (repo_root or Path.cwd()).resolve()
    load_dotenv(repo_root / ".env")

    if config is None:
        env_path = os.getenv(CONFIG_ENV)
        if config_path is None:
            config_path = Path(env_path) if env_path else repo_root / DEFAULT_CONFIG_PATH
        config = load_site_config(config_path, base_dir=repo_root)

    store_cfg = config.store
    api_key = store_cfg.resolve_api_key()
    if not api_key:
        LOGGER.warning("No table-service key configured (set %s); requests will be anonymous", store_cfg.api_key_env)
    store = RemoteStoreClient(
        RemoteStoreConfig(base_url=store_cfg.base_url, api_key=api_key, rest_path=store_cfg.rest_path),
        client=http_client,
        timeout=store_cfg.timeout,
    )
    state = ContentState(store)

    preferences_path = config.preferences.path
    if not preferences_path.is_absolute():
        preferences_path = repo_root / preferences_path

    return SiteContext(
        config=config,
        repo_root=repo_root,
        store=store,
        state=state,
        preferences=LanguagePreference(preferences_path, default=config.preferences.default_language),
        gate=LoginGate(config.admin),
        generator=OutlineGenerator(config.ai, program=outline_program),
        public=PublicSite(state),
    )


__all__ = ["bootstrap_site"]
