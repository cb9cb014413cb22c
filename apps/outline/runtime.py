"""Helpers for configuring the DSPy language model behind the outline generator."""

from __future__ import annotations

import os
from typing import Any, Dict

import dspy

from edusite.core.config import OutlineModelConfig


class OutlineConfigurationError(RuntimeError):
    """Raised when DSPy cannot be configured for outline generation."""


def _build_openai_lm(
    model_name: str,
    *,
    api_key: str,
    temperature: float | None,
    max_tokens: int | None,
    api_base: str | None = None,
    extra_kwargs: Dict[str, Any] | None = None,
) -> object:
    lm_cls = getattr(dspy, "OpenAI", None)
    kwargs: Dict[str, Any] = {"model": model_name}
    if temperature is not None:
        kwargs["temperature"] = temperature
    if max_tokens is not None:
        kwargs["max_tokens"] = max_tokens
    if api_base:
        kwargs["api_base"] = api_base
    if extra_kwargs:
        kwargs.update(extra_kwargs)
    kwargs["api_key"] = api_key
    if lm_cls is None:  # current DSPy releases route every provider through dspy.LM
        lm_cls = dspy.LM
        if "/" not in model_name:
            kwargs["model"] = f"openai/{model_name}"
    return lm_cls(**kwargs)


def _resolve_api_key(cfg: OutlineModelConfig) -> str | None:
    preferred_envs = []
    if cfg.api_key_env:
        preferred_envs.append(cfg.api_key_env)
    preferred_envs.append("OPENAI_API_KEY")
    for env_var in preferred_envs:
        if value := os.getenv(env_var):
            return value
    return None


def _resolve_api_base(cfg: OutlineModelConfig) -> str | None:
    if cfg.api_base:
        return cfg.api_base
    env_candidates = []
    if cfg.api_base_env:
        env_candidates.append(cfg.api_base_env)
    env_candidates.append("OPENAI_API_BASE")
    for env_var in env_candidates:
        if value := os.getenv(env_var):
            return value
    return None


def configure_outline_model(cfg: OutlineModelConfig, *, api_key: str | None = None) -> object:
    """Instantiate the LM handle used for outline drafts."""

    if cfg.provider != "openai":
        raise OutlineConfigurationError(f"Unsupported provider '{cfg.provider}' for outline generation")

    key = api_key or _resolve_api_key(cfg)
    if not key:
        expected_env = cfg.api_key_env or "OPENAI_API_KEY"
        raise OutlineConfigurationError(f"Missing API key for outline generation; set {expected_env}.")

    return _build_openai_lm(
        cfg.model,
        api_key=key,
        temperature=cfg.temperature,
        max_tokens=cfg.max_tokens,
        api_base=_resolve_api_base(cfg),
        extra_kwargs=cfg.extra_kwargs,
    )


__all__ = ["OutlineConfigurationError", "configure_outline_model"]
