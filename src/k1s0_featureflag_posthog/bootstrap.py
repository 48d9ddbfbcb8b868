"""設定からのプロバイダー構築と OpenFeature への登録"""

from __future__ import annotations

from openfeature import api
from posthog import Posthog

from .backend import PostHogBackend
from .config import ProviderConfig
from .logger import new_logger
from .provider import PostHogProvider


def create_client(config: ProviderConfig) -> Posthog:
    """設定から posthog.Posthog クライアントを生成する。"""
    section = config.posthog
    return Posthog(
        section.api_key,
        host=section.host,
        personal_api_key=section.personal_api_key,
        feature_flags_request_timeout_seconds=section.feature_flags_request_timeout_seconds,
        disabled=section.disabled,
    )


def create_provider(config: ProviderConfig, client: Posthog | None = None) -> PostHogProvider:
    """設定から PostHogProvider を生成する。client 省略時は新規に生成する。"""
    backend = PostHogBackend(
        client if client is not None else create_client(config),
        only_evaluate_locally=config.posthog.only_evaluate_locally,
        send_feature_flag_events=config.posthog.send_feature_flag_events,
    )
    return PostHogProvider(backend)


def register_provider(
    config: ProviderConfig,
    domain: str | None = None,
    client: Posthog | None = None,
) -> PostHogProvider:
    """ロガーを設定し、生成したプロバイダーを OpenFeature API に登録する。"""
    log = new_logger(config.log)
    provider = create_provider(config, client)
    if domain is None:
        api.set_provider(provider)
    else:
        api.set_provider(provider, domain)
    log.info("posthog provider registered", domain=domain, host=config.posthog.host)
    return provider
