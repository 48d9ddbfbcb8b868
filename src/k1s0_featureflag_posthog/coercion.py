"""フラグ値の型変換

PostHog はフラグ値を常に文字列で返すため、評価時に期待される型へ変換する。
"""

from __future__ import annotations

import json
import math
from typing import Annotated, Any, Callable, TypeVar

from openfeature.exception import TypeMismatchError
from pydantic import Field, StringConstraints, TypeAdapter

T = TypeVar("T", bool, int, float, str)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# 前後の空白や "_" 区切りを受け付けないよう、変換前にリテラルの形式を検証する
_INT_LITERAL = TypeAdapter(Annotated[str, StringConstraints(pattern=r"^[+-]?[0-9]+$")])
_FLOAT_LITERAL = TypeAdapter(
    Annotated[
        str,
        StringConstraints(
            pattern=r"^[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|(?i:inf|infinity|nan))$"
        ),
    ]
)

_BOOL = TypeAdapter(bool)
_INT64 = TypeAdapter(Annotated[int, Field(ge=_INT64_MIN, le=_INT64_MAX)])
_FLOAT = TypeAdapter(float)


def _parse_bool(s: str) -> bool:
    return _BOOL.validate_python(s)


def _parse_int(s: str) -> int:
    return _INT64.validate_python(_INT_LITERAL.validate_python(s))


def _parse_float(s: str) -> float:
    f = _FLOAT.validate_python(_FLOAT_LITERAL.validate_python(s))
    # 有限のリテラルが float64 の範囲を超えた場合
    if math.isinf(f) and "inf" not in s.lower():
        raise ValueError(f"{s} is out of range")
    return f


_PARSERS: dict[type, tuple[Callable[[str], Any], str]] = {
    bool: (_parse_bool, "boolean"),
    int: (_parse_int, "int"),
    float: (_parse_float, "float"),
}


def quote(value: str) -> str:
    """エラーメッセージ用に値を二重引用符付きで表記する。"""
    return json.dumps(value, ensure_ascii=False)


def _require_str(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeMismatchError(f"{value} is not a string")
    return value


def parse_flag_value(value: Any, target_type: type[T]) -> T:
    """文字列のフラグ値を target_type に変換する。

    Raises:
        TypeMismatchError: 値が文字列でない、または target_type として解釈できない場合
        TypeError: 未対応の target_type が指定された場合
    """
    s = _require_str(value)
    if target_type is str:
        return s  # type: ignore[return-value]
    try:
        parse, type_name = _PARSERS[target_type]
    except KeyError:
        raise TypeError(f"unsupported type {target_type.__name__}") from None
    try:
        return parse(s)  # type: ignore[no-any-return]
    except ValueError:
        raise TypeMismatchError(f"{quote(s)} is not a {type_name}") from None


def parse_object_value(value: Any) -> dict[str, Any]:
    """JSON 文字列のフラグ値をオブジェクトにデコードする。

    Raises:
        TypeMismatchError: 値が JSON オブジェクトとして解釈できない場合
    """
    s = _require_str(value)
    try:
        obj = json.loads(s)
    except json.JSONDecodeError:
        raise TypeMismatchError("invalid JSON as flag value") from None
    if not isinstance(obj, dict):
        raise TypeMismatchError("invalid JSON as flag value")
    return obj
