"""プロバイダー設定 (pydantic BaseModel) と設定ファイル読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import PostHogProviderError, PostHogProviderErrorCodes


class PostHogSection(BaseModel):
    """PostHog 接続設定。"""

    api_key: str
    host: str = "https://us.i.posthog.com"
    personal_api_key: str | None = None
    feature_flags_request_timeout_seconds: int = Field(default=3, ge=1)
    only_evaluate_locally: bool = False
    send_feature_flag_events: bool = True
    disabled: bool = False


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class ProviderConfig(BaseModel):
    """プロバイダー設定全体。"""

    posthog: PostHogSection
    log: LogSection = Field(default_factory=LogSection)


def load(path: Path) -> ProviderConfig:
    """YAML 設定ファイルを読み込んで ProviderConfig を返す。"""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PostHogProviderError(
            code=PostHogProviderErrorCodes.CONFIG_ERROR,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data: dict[str, Any] = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise PostHogProviderError(
            code=PostHogProviderErrorCodes.CONFIG_ERROR,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    try:
        return ProviderConfig.model_validate(data)
    except ValidationError as e:
        raise PostHogProviderError(
            code=PostHogProviderErrorCodes.CONFIG_ERROR,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
