"""featureflag-posthog ライブラリの例外型定義"""

from __future__ import annotations

from openfeature.exception import ErrorCode


class PostHogProviderError(Exception):
    """featureflag-posthog ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class PostHogProviderErrorCodes:
    """エラーコード定数。"""

    MISSING_TARGETING_KEY: str = "MISSING_TARGETING_KEY"
    INVALID_TARGETING_KEY: str = "INVALID_TARGETING_KEY"
    INVALID_GROUPS: str = "INVALID_GROUPS"
    INVALID_PROPERTIES: str = "INVALID_PROPERTIES"
    CONFIG_ERROR: str = "CONFIG_ERROR"


def resolution_error_code(err: PostHogProviderError) -> ErrorCode:
    """コンテキスト変換エラーを OpenFeature のエラーコードに対応付ける。"""
    if err.code == PostHogProviderErrorCodes.MISSING_TARGETING_KEY:
        return ErrorCode.TARGETING_KEY_MISSING
    return ErrorCode.GENERAL
