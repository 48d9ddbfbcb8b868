"""PostHog OpenFeature プロバイダー"""

from __future__ import annotations

from functools import partial
from typing import Any, Callable, TypeVar

import structlog
from openfeature.evaluation_context import EvaluationContext
from openfeature.exception import ErrorCode, TypeMismatchError
from openfeature.flag_evaluation import FlagResolutionDetails, Reason
from openfeature.hook import Hook
from openfeature.provider import AbstractProvider, Metadata

from .backend import FeatureFlagBackend
from .coercion import parse_flag_value, parse_object_value, quote
from .context import translate_payload
from .exceptions import PostHogProviderError, resolution_error_code
from .models import FeatureFlagPayload, LookupResult

V = TypeVar("V")

PROVIDER_NAME = "PostHog"

logger = structlog.get_logger(__name__)


class PostHogProvider(AbstractProvider):
    """PostHog のリモート評価 API を利用する OpenFeature プロバイダー。

    全ての評価メソッドは同じ手順 (コンテキスト変換 → フラグ問い合わせ → 値の型変換)
    を実行し、失敗時は呼び出し元のデフォルト値とエラー情報を返す。
    """

    def __init__(self, backend: FeatureFlagBackend) -> None:
        super().__init__()
        self._backend = backend

    def get_metadata(self) -> Metadata:
        return Metadata(name=PROVIDER_NAME)

    def get_provider_hooks(self) -> list[Hook]:
        """PostHog プロバイダーはフックを持たないため空リストを返す。"""
        return []

    def resolve_boolean_details(
        self,
        flag_key: str,
        default_value: bool,
        evaluation_context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[bool]:
        return self._resolve(
            flag_key,
            default_value,
            evaluation_context,
            partial(parse_flag_value, target_type=bool),
        )

    def resolve_string_details(
        self,
        flag_key: str,
        default_value: str,
        evaluation_context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[str]:
        return self._resolve(
            flag_key,
            default_value,
            evaluation_context,
            partial(parse_flag_value, target_type=str),
        )

    def resolve_integer_details(
        self,
        flag_key: str,
        default_value: int,
        evaluation_context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[int]:
        return self._resolve(
            flag_key,
            default_value,
            evaluation_context,
            partial(parse_flag_value, target_type=int),
        )

    def resolve_float_details(
        self,
        flag_key: str,
        default_value: float,
        evaluation_context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[float]:
        return self._resolve(
            flag_key,
            default_value,
            evaluation_context,
            partial(parse_flag_value, target_type=float),
        )

    def resolve_object_details(
        self,
        flag_key: str,
        default_value: dict | list,
        evaluation_context: EvaluationContext | None = None,
    ) -> FlagResolutionDetails[dict | list]:
        return self._resolve(flag_key, default_value, evaluation_context, parse_object_value)

    def _resolve(
        self,
        flag_key: str,
        default_value: Any,
        evaluation_context: EvaluationContext | None,
        coerce: Callable[[Any], V],
    ) -> FlagResolutionDetails[V]:
        try:
            payload = translate_payload(evaluation_context, flag_key)
        except PostHogProviderError as e:
            logger.warning("invalid evaluation context", flag_key=flag_key, code=e.code)
            return FlagResolutionDetails(
                value=default_value,
                reason=Reason.ERROR,
                error_code=resolution_error_code(e),
                error_message=e.message,
            )

        try:
            result = self._get_feature_flag(payload)
        except Exception as e:
            logger.warning("feature flag request failed", flag_key=flag_key, error=str(e))
            return FlagResolutionDetails(
                value=default_value,
                reason=Reason.ERROR,
                error_code=ErrorCode.GENERAL,
                error_message=str(e),
            )

        if not result.found:
            logger.info("feature flag not found", flag_key=flag_key)
            return FlagResolutionDetails(
                value=default_value,
                reason=Reason.DEFAULT,
                error_code=ErrorCode.FLAG_NOT_FOUND,
                error_message=f"{quote(flag_key)} not found",
            )

        try:
            value = coerce(result.value)
        except TypeMismatchError as e:
            logger.warning(
                "feature flag type mismatch", flag_key=flag_key, error=e.error_message
            )
            return FlagResolutionDetails(
                value=default_value,
                reason=Reason.ERROR,
                error_code=e.error_code,
                error_message=e.error_message,
            )

        logger.debug("feature flag resolved", flag_key=flag_key)
        return FlagResolutionDetails(value=value, reason=Reason.TARGETING_MATCH)

    def _get_feature_flag(self, payload: FeatureFlagPayload) -> LookupResult:
        res = self._backend.get_feature_flag(payload)
        # 見つからない場合のみ False が返る。見つかった値は常に文字列。
        if isinstance(res, bool):
            return LookupResult(found=False)
        return LookupResult(found=True, value=res)
