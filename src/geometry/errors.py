"""図形モデルが送出する例外の定義。

エラー種別は以下の 3 つで網羅される:

- ``OutOfRangeError``: 数値属性（辺の長さ・半径）が 0 以下
- ``InvalidArgumentError``: 値の組が幾何学的関係（三角不等式・直角条件）を満たさない
- ``InvalidStateError``: 検証済みのはずのオブジェクトで不変条件が崩れている（実装バグ）

呼び出し側は ``ShapeError`` を捕捉すれば全種別をまとめて扱える。
"""

from __future__ import annotations


class ShapeError(Exception):
    """図形モデルの全例外の基底クラス。"""


class OutOfRangeError(ShapeError, ValueError):
    """数値属性が許容範囲外（0 以下）であることを示す。

    Attributes:
        field: 不正な値が渡された属性名（例: ``"side_a"``, ``"radius"``）。
        value: 渡された値。
    """

    def __init__(self, field: str, value: float) -> None:
        self.field = field
        self.value = value
        super().__init__(f"{field} must be > 0, got {value}")


class InvalidArgumentError(ShapeError, ValueError):
    """値の組が要求される幾何学的関係を満たさないことを示す。

    Attributes:
        values: 検証に失敗した値の組。
    """

    def __init__(self, message: str, values: tuple[float, ...] = ()) -> None:
        self.values = values
        super().__init__(message)


class InvalidStateError(ShapeError, AssertionError):
    """構築後のオブジェクトで不変条件が崩れていることを示す。

    通常の入力エラーではなくプログラム上の欠陥であり、回復は想定しない。
    """
