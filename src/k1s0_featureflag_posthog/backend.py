"""PostHog フラグ問い合わせバックエンド"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Protocol

from .models import FeatureFlagPayload

if TYPE_CHECKING:
    from posthog import Posthog


class FeatureFlagBackend(Protocol):
    """フラグ問い合わせバックエンドプロトコル。

    フラグが見つからない場合は False を、見つかった場合は文字列の値を返す。
    通信エラーは例外として送出する。
    """

    def get_feature_flag(self, payload: FeatureFlagPayload) -> bool | str: ...


class PostHogBackend:
    """posthog.Posthog クライアントをバックエンドプロトコルに適合させるアダプター。"""

    def __init__(
        self,
        client: Posthog,
        only_evaluate_locally: bool = False,
        send_feature_flag_events: bool = True,
    ) -> None:
        self._client = client
        self._only_evaluate_locally = only_evaluate_locally
        self._send_feature_flag_events = send_feature_flag_events

    def get_feature_flag(self, payload: FeatureFlagPayload) -> bool | str:
        res = self._client.get_feature_flag(
            payload.key,
            payload.distinct_id,
            groups=payload.groups,
            person_properties=payload.person_properties,
            group_properties=payload.group_properties,
            only_evaluate_locally=self._only_evaluate_locally,
            send_feature_flag_events=self._send_feature_flag_events,
        )
        # Python SDK は未定義フラグに None、真偽値フラグの一致に True を返す
        if res is None:
            return False
        if res is True:
            return "true"
        return res


class InMemoryFeatureFlagBackend:
    """テスト用インメモリバックエンド。"""

    def __init__(self) -> None:
        self._flags: dict[str, bool | str] = {}
        self._error: Exception | None = None
        self._lock = threading.Lock()
        self.calls: list[FeatureFlagPayload] = []

    def set_flag(self, key: str, value: bool | str) -> None:
        """フラグ値を設定する。"""
        self._flags[key] = value

    def fail_with(self, error: Exception | None) -> None:
        """以降の問い合わせで送出する例外を設定する。None で解除。"""
        self._error = error

    def get_feature_flag(self, payload: FeatureFlagPayload) -> bool | str:
        with self._lock:
            self.calls.append(payload)
        if self._error is not None:
            raise self._error
        return self._flags.get(payload.key, False)
