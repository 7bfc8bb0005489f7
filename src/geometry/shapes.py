"""二次元図形のモデル。

クラス:
    Shape:         図形の抽象基底クラス
    Triangle:      検証済みの三角形
    RightTriangle: ピタゴラスの関係に制約された三角形
    Circle:        半径で定義される円

すべての図形はロガー（``ShapeLogger``）を必須引数として受け取る。
既定のコンソール出力が必要なら呼び出し側が ``ConsoleLogger()`` を渡す。

不変条件に違反する値は構築時・更新時に例外として拒否され、
不正な状態のインスタンスが外部から観測されることはない。
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import TypeVar

from geometry.config import REPORT
from geometry.errors import InvalidArgumentError, InvalidStateError
from geometry.loggers import ShapeLogger
from geometry.protocols import Measurable
from geometry.validation import (
    TriangleType,
    classify_triangle,
    require_positive,
    satisfies_right_angle,
    satisfies_triangle_inequality,
    sorted_sides,
    validate_triangle_sides,
)
from observability.tracing import trace_shape_operation

# ---------------------------------------------------------------------------
# 抽象基底クラス
# ---------------------------------------------------------------------------


def _require_name(name: str) -> None:
    if not name or not name.strip():
        raise InvalidArgumentError("name must not be empty")


class Shape(ABC):
    """二次元図形の抽象基底クラス。

    不変条件 (Invariant):
        - ``name`` は空文字列ではないこと（代入時も検証する）

    Attributes:
        name: 図形の表示名。変更可能。
        logger: 注入されたロガー。図形はロガーを所有しない。
    """

    def __init__(self, name: str, logger: ShapeLogger) -> None:
        _require_name(name)
        self._name = name
        self._logger = logger
        self._logger.log_info(f"Created shape: {name}")

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        _require_name(value)
        self._name = value

    @property
    def logger(self) -> ShapeLogger:
        return self._logger

    @abstractmethod
    def calculate_perimeter(self) -> float:
        """周長を計算し、結果をログに記録する。"""

    @abstractmethod
    def calculate_area(self) -> float:
        """面積を計算し、結果をログに記録する。"""

    def describe(self) -> str:
        """名前・周長・面積（小数点以下 2 桁）を複数行で返す。"""
        return "\n".join(self._describe_lines())

    def detailed_info(self) -> str:
        """``describe()`` に図形固有の詳細行を加えたテキストを返す。"""
        return "\n".join(self._describe_lines() + self._detail_lines())

    def print_info(self) -> None:
        """``detailed_info()`` を標準出力へ表示する。"""
        print(self.detailed_info())

    def _describe_lines(self) -> list[str]:
        return [
            f"Shape: {self.name}",
            f"Perimeter: {REPORT.number(self.calculate_perimeter())}",
            f"Area: {REPORT.number(self.calculate_area())}",
        ]

    def _detail_lines(self) -> list[str]:
        return []

    def __str__(self) -> str:
        return self.describe()


# ---------------------------------------------------------------------------
# 三角形
# ---------------------------------------------------------------------------


class Triangle(Shape):
    """3 辺で定義される三角形。

    不変条件 (Invariant):
        - 各辺は 0 より大きいこと
        - 三角不等式が 3 通りすべてで厳密に成り立つこと

    辺は 1 つのタプルとして保持し、``update_sides`` は検証が
    すべて通ってから一度に差し替える（部分的な更新は起こらない）。

    Raises:
        OutOfRangeError: 0 以下の辺が渡された場合（最初の辺名を持つ）。
        InvalidArgumentError: 三角不等式を満たさない場合。

    Example::

        triangle = Triangle(3, 4, 5, ConsoleLogger())
        triangle.calculate_area()      # -> 6.0
        triangle.update_sides(1, 2, 20)  # InvalidArgumentError, 辺は (3, 4, 5) のまま
    """

    def __init__(
        self,
        side_a: float,
        side_b: float,
        side_c: float,
        logger: ShapeLogger,
        *,
        name: str = "Triangle",
    ) -> None:
        validate_triangle_sides(side_a, side_b, side_c)
        super().__init__(name, logger)
        self._sides = (float(side_a), float(side_b), float(side_c))
        self._logger.log_info(f"Triangle created: {self._format_sides()}")

    @property
    def side_a(self) -> float:
        return self._sides[0]

    @property
    def side_b(self) -> float:
        return self._sides[1]

    @property
    def side_c(self) -> float:
        return self._sides[2]

    @property
    def sides(self) -> tuple[float, float, float]:
        return self._sides

    @trace_shape_operation("triangle.update_sides")
    def update_sides(self, side_a: float, side_b: float, side_c: float) -> None:
        """3 辺をまとめて差し替える。

        検証は構築時と同じ 2 段階で行い、失敗した場合は
        既存の辺を一切変更せずに例外を送出する。

        Raises:
            OutOfRangeError: 0 以下の辺が渡された場合。
            InvalidArgumentError: 新しい辺が要求される関係を満たさない場合。
        """
        self._sides = self._validated_sides(side_a, side_b, side_c)
        self._logger.log_info(f"Sides updated: {self._format_sides()}")

    def _validated_sides(
        self, side_a: float, side_b: float, side_c: float
    ) -> tuple[float, float, float]:
        validate_triangle_sides(side_a, side_b, side_c, subject="New sides")
        return float(side_a), float(side_b), float(side_c)

    def sides_count(self) -> int:
        return 3

    def is_convex(self) -> bool:
        # 三角形は常に凸
        return True

    @trace_shape_operation("triangle.perimeter")
    def calculate_perimeter(self) -> float:
        perimeter = sum(self._sides)
        self._logger.log_info(f"Perimeter computed: {perimeter:.2f}")
        return perimeter

    @trace_shape_operation("triangle.area")
    def calculate_area(self) -> float:
        """ヘロンの公式で面積を計算する。

        Raises:
            InvalidStateError: 保持している辺が三角不等式を満たさない場合。
        """
        if not self.is_valid_triangle():
            raise InvalidStateError("Cannot compute the area of an invalid triangle")

        a, b, c = self._sides
        s = (a + b + c) / 2
        area = math.sqrt(max(0.0, s * (s - a) * (s - b) * (s - c)))
        self._logger.log_info(f"Area computed: {area:.2f}")
        return area

    def is_valid_triangle(self) -> bool:
        return satisfies_triangle_inequality(*self._sides)

    def get_triangle_type(self) -> TriangleType:
        return classify_triangle(*self._sides)

    def _format_sides(self) -> str:
        a, b, c = self._sides
        return f"a={a:.2f}, b={b:.2f}, c={c:.2f}"

    def _describe_lines(self) -> list[str]:
        return super()._describe_lines() + [f"Type: {self.get_triangle_type()}"]

    def _detail_lines(self) -> list[str]:
        return [
            f"Sides: {self.sides_count()}",
            f"Convex: {REPORT.flag(self.is_convex())}",
        ]

    def __repr__(self) -> str:
        a, b, c = self._sides
        return f"{type(self).__name__}(side_a={a!r}, side_b={b!r}, side_c={c!r})"


# ---------------------------------------------------------------------------
# 直角三角形
# ---------------------------------------------------------------------------


class RightTriangle(Triangle):
    """直角三角形。

    辺は常に ``(cathetus1, cathetus2, hypotenuse)`` の順で保持する。
    面積は ``cathetus1 * cathetus2 / 2`` で計算するため、
    直角の関係（許容誤差 1e-4）が常に成り立っていなければならない。

    生成には用途ごとのファクトリを使う:

    - ``RightTriangle.from_legs(c1, c2, logger)``: 2 つの直角辺から生成（斜辺は導出）
    - ``RightTriangle.from_sides(a, b, c, logger)``: 3 辺から生成（昇順に並べて検証）

    Raises:
        OutOfRangeError: 0 以下の辺が渡された場合。
        InvalidArgumentError: 3 辺が三角不等式または直角の関係を満たさない場合。
    """

    def __init__(
        self,
        cathetus1: float,
        cathetus2: float,
        logger: ShapeLogger,
        *,
        hypotenuse: float | None = None,
    ) -> None:
        require_positive(cathetus1, "cathetus1")
        require_positive(cathetus2, "cathetus2")
        if hypotenuse is None:
            hypotenuse = math.hypot(cathetus1, cathetus2)
        elif not satisfies_right_angle(cathetus1, cathetus2, hypotenuse):
            raise InvalidArgumentError(
                f"Sides {cathetus1:.2f}, {cathetus2:.2f}, {hypotenuse:.2f} "
                "do not form a right triangle",
                (cathetus1, cathetus2, hypotenuse),
            )

        super().__init__(cathetus1, cathetus2, hypotenuse, logger, name="Right triangle")
        self._logger.log_info(
            f"Right triangle: cathetus1={self.cathetus1:.2f}, "
            f"cathetus2={self.cathetus2:.2f}, hypotenuse={self.hypotenuse:.2f}"
        )

    @classmethod
    def from_legs(
        cls, cathetus1: float, cathetus2: float, logger: ShapeLogger
    ) -> RightTriangle:
        """2 つの直角辺から生成する。斜辺は ``sqrt(c1² + c2²)``。"""
        return cls(cathetus1, cathetus2, logger)

    @classmethod
    def from_sides(
        cls, side_a: float, side_b: float, side_c: float, logger: ShapeLogger
    ) -> RightTriangle:
        """任意の順序の 3 辺から生成する。

        三角形としての検証（正値・三角不等式）を先に行い、
        昇順に並べた最大辺を斜辺として直角の関係を検証する。
        """
        cathetus1, cathetus2, hypotenuse = _right_triangle_sides(side_a, side_b, side_c)
        return cls(cathetus1, cathetus2, logger, hypotenuse=hypotenuse)

    @property
    def cathetus1(self) -> float:
        return self._sides[0]

    @property
    def cathetus2(self) -> float:
        return self._sides[1]

    @property
    def hypotenuse(self) -> float:
        return self._sides[2]

    def _validated_sides(
        self, side_a: float, side_b: float, side_c: float
    ) -> tuple[float, float, float]:
        return _right_triangle_sides(side_a, side_b, side_c, subject="New sides")

    def is_right_triangle(self) -> bool:
        return satisfies_right_angle(*sorted_sides(*self._sides))

    @trace_shape_operation("right_triangle.area")
    def calculate_area(self) -> float:
        area = self.cathetus1 * self.cathetus2 / 2
        self._logger.log_info(f"Right triangle area computed: {area:.2f}")
        return area

    def get_triangle_type(self) -> TriangleType:
        return TriangleType.RIGHT

    def _describe_lines(self) -> list[str]:
        # 種別行は detailed_info 側に出す
        return Shape._describe_lines(self) + [
            f"Cathetus 1: {REPORT.number(self.cathetus1)}",
            f"Cathetus 2: {REPORT.number(self.cathetus2)}",
            f"Hypotenuse: {REPORT.number(self.hypotenuse)}",
            "Angle between legs: 90°",
        ]

    def _detail_lines(self) -> list[str]:
        return [f"Type: {self.get_triangle_type()}"] + super()._detail_lines()

    def __repr__(self) -> str:
        return (
            f"RightTriangle(cathetus1={self.cathetus1!r}, "
            f"cathetus2={self.cathetus2!r}, hypotenuse={self.hypotenuse!r})"
        )


def _right_triangle_sides(
    side_a: float, side_b: float, side_c: float, *, subject: str = "Sides"
) -> tuple[float, float, float]:
    validate_triangle_sides(side_a, side_b, side_c, subject=subject)
    cathetus1, cathetus2, hypotenuse = sorted_sides(side_a, side_b, side_c)
    if not satisfies_right_angle(cathetus1, cathetus2, hypotenuse):
        raise InvalidArgumentError(
            f"{subject} {side_a:.2f}, {side_b:.2f}, {side_c:.2f} do not form a right triangle",
            (side_a, side_b, side_c),
        )
    return float(cathetus1), float(cathetus2), float(hypotenuse)


# ---------------------------------------------------------------------------
# 円
# ---------------------------------------------------------------------------


class Circle(Shape):
    """半径で定義される円。

    不変条件 (Invariant):
        - ``radius`` は 0 より大きいこと

    Raises:
        OutOfRangeError: ``radius`` が 0 以下の場合。
    """

    def __init__(self, radius: float, logger: ShapeLogger) -> None:
        require_positive(radius, "radius")
        super().__init__("Circle", logger)
        self._radius = float(radius)
        self._logger.log_info(f"Circle created: radius={self._radius:.2f}")

    @property
    def radius(self) -> float:
        return self._radius

    def diameter(self) -> float:
        return 2 * self._radius

    @trace_shape_operation("circle.perimeter")
    def calculate_perimeter(self) -> float:
        perimeter = 2 * math.pi * self._radius
        self._logger.log_info(f"Circumference computed: {perimeter:.2f}")
        return perimeter

    @trace_shape_operation("circle.area")
    def calculate_area(self) -> float:
        area = math.pi * self._radius * self._radius
        self._logger.log_info(f"Circle area computed: {area:.2f}")
        return area

    def _detail_lines(self) -> list[str]:
        return [
            f"Radius: {REPORT.number(self._radius)}",
            f"Diameter: {REPORT.number(self.diameter())}",
        ]

    def __repr__(self) -> str:
        return f"Circle(radius={self._radius!r})"


# ---------------------------------------------------------------------------
# 比較
# ---------------------------------------------------------------------------

M = TypeVar("M", bound=Measurable)

_METRICS = {
    "perimeter": "calculate_perimeter",
    "area": "calculate_area",
}


def largest_by(shapes: Iterable[M], metric: str) -> tuple[M, float]:
    """指定した尺度が最大の図形とその値を返す。

    Args:
        shapes: 比較対象。周長と面積を計算できる任意のオブジェクト（``Measurable``）。
        metric: ``"perimeter"`` または ``"area"``。

    Returns:
        ``(図形, 値)`` のタプル。同値の場合は先に現れた図形。

    Raises:
        InvalidArgumentError: ``metric`` が未知、または ``shapes`` が空の場合。
    """
    if metric not in _METRICS:
        raise InvalidArgumentError(f"unknown metric: {metric!r}")

    best: tuple[M, float] | None = None
    for shape in shapes:
        value = getattr(shape, _METRICS[metric])()
        if best is None or value > best[1]:
            best = (shape, value)

    if best is None:
        raise InvalidArgumentError("shapes must not be empty")
    return best
