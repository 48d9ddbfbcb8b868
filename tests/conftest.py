"""テスト共通フィクスチャ"""

from collections.abc import Generator

import pytest
from k1s0_featureflag_posthog import InMemoryFeatureFlagBackend, PostHogProvider
from openfeature import api
from openfeature.evaluation_context import EvaluationContext


@pytest.fixture
def backend() -> InMemoryFeatureFlagBackend:
    return InMemoryFeatureFlagBackend()


@pytest.fixture
def provider(backend: InMemoryFeatureFlagBackend) -> PostHogProvider:
    return PostHogProvider(backend)


@pytest.fixture
def eval_ctx() -> EvaluationContext:
    return EvaluationContext(targeting_key="12345")


@pytest.fixture
def clear_openfeature() -> Generator[None, None, None]:
    """グローバルに登録したプロバイダーをテスト後に解除する。"""
    yield
    api.clear_providers()
