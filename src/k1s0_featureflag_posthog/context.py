"""評価コンテキストから PostHog リクエストへの変換"""

from __future__ import annotations

from typing import Any

from openfeature.evaluation_context import EvaluationContext

from .exceptions import PostHogProviderError, PostHogProviderErrorCodes
from .models import FeatureFlagPayload, PostHogProperties

# 評価コンテキストで解釈するキー
DISTINCT_ID_CONTEXT_KEY = "targetingKey"
GROUPS_CONTEXT_KEY = "groups"
PROPERTIES_CONTEXT_KEY = "properties"


def _is_group_key(value: Any) -> bool:
    return isinstance(value, (str, int)) and not isinstance(value, bool)


def _is_groups(value: Any) -> bool:
    return isinstance(value, dict) and all(
        isinstance(k, str) and _is_group_key(v) for k, v in value.items()
    )


def translate_payload(
    evaluation_context: EvaluationContext | None, flag_key: str
) -> FeatureFlagPayload:
    """評価コンテキストを FeatureFlagPayload に変換する。

    groups と properties は PostHog のネイティブ形式で渡されている必要があり、
    型の検証のみ行う。

    Raises:
        PostHogProviderError: targeting key が無い、または groups / properties の型が不正な場合
    """
    if evaluation_context is None or evaluation_context.targeting_key is None:
        raise PostHogProviderError(
            PostHogProviderErrorCodes.MISSING_TARGETING_KEY,
            "missing target key in evaluation context",
        )
    distinct_id = evaluation_context.targeting_key
    if not isinstance(distinct_id, str):
        raise PostHogProviderError(
            PostHogProviderErrorCodes.INVALID_TARGETING_KEY,
            "invalid target key in evaluation context",
        )

    attributes = evaluation_context.attributes or {}

    groups: dict[str, str | int] = {}
    if GROUPS_CONTEXT_KEY in attributes:
        raw_groups = attributes[GROUPS_CONTEXT_KEY]
        if not _is_groups(raw_groups):
            raise PostHogProviderError(
                PostHogProviderErrorCodes.INVALID_GROUPS,
                "invalid groups in evaluation context",
            )
        groups = raw_groups

    properties = PostHogProperties()
    if PROPERTIES_CONTEXT_KEY in attributes:
        raw_properties = attributes[PROPERTIES_CONTEXT_KEY]
        if not isinstance(raw_properties, PostHogProperties):
            raise PostHogProviderError(
                PostHogProviderErrorCodes.INVALID_PROPERTIES,
                "invalid properties in evaluation context",
            )
        properties = raw_properties

    return FeatureFlagPayload(
        key=flag_key,
        distinct_id=distinct_id,
        groups=groups,
        person_properties=properties.person_properties,
        group_properties=properties.group_properties,
    )
