"""featureflag-posthog データモデル"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PostHogProperties:
    """評価コンテキストの "properties" に渡すプロパティ上書き。"""

    group_properties: dict[str, dict[str, Any]] = field(default_factory=dict)
    person_properties: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FeatureFlagPayload:
    """PostHog へのフラグ問い合わせリクエスト。"""

    key: str
    distinct_id: str
    groups: dict[str, str | int] = field(default_factory=dict)
    person_properties: dict[str, Any] = field(default_factory=dict)
    group_properties: dict[str, dict[str, Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class LookupResult:
    """フラグ問い合わせ結果。found=False は PostHog がフラグを返さなかったことを示す。"""

    found: bool
    value: Any = None
