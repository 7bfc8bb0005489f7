"""幾何学的な検証ヘルパーと許容誤差つき比較。

浮動小数点の丸め誤差を吸収するため、導出された幾何学的関係
（三角形の分類・直角判定）は必ず ``are_equal`` で比較し、
``==`` による厳密比較は使わない。

関数:
    are_equal:                   許容誤差つき等価判定
    require_positive:            正の値であることの検証
    satisfies_triangle_inequality: 三角不等式の判定
    validate_triangle_sides:     辺の 2 段階検証（正値 → 三角不等式）
    sorted_sides:                辺の昇順整列
    satisfies_right_angle:       ピタゴラスの関係の判定
    classify_triangle:           三角形の種別判定
"""

from __future__ import annotations

from enum import Enum

from geometry.config import TOLERANCE
from geometry.errors import InvalidArgumentError, OutOfRangeError

SIDE_FIELDS = ("side_a", "side_b", "side_c")


class TriangleType(str, Enum):
    """三角形の種別。値はそのまま表示文字列として使う。"""

    INVALID = "Invalid triangle"
    EQUILATERAL = "Equilateral"
    ISOSCELES = "Isosceles"
    SCALENE = "Scalene"
    RIGHT = "Right triangle"

    def __str__(self) -> str:
        return self.value


def are_equal(x: float, y: float, tolerance: float = TOLERANCE) -> bool:
    """2 つの実数の差の絶対値が ``tolerance`` 未満なら等しいとみなす。"""
    return abs(x - y) < tolerance


def require_positive(value: float, field: str) -> None:
    """``value`` が 0 より大きいことを検証する。

    Args:
        value: 検証する値。
        field: エラーに含める属性名。

    Raises:
        OutOfRangeError: ``value`` が 0 以下の場合。
    """
    if not value > 0:
        raise OutOfRangeError(field, value)


def satisfies_triangle_inequality(a: float, b: float, c: float) -> bool:
    """3 通りすべての組み合わせで三角不等式が厳密に成り立つか判定する。"""
    return a + b > c and a + c > b and b + c > a


def validate_triangle_sides(
    a: float, b: float, c: float, *, subject: str = "Sides"
) -> None:
    """三角形の辺を 2 段階で検証する。

    事前条件 (Precondition):
        - 各辺は 0 より大きいこと（``side_a`` → ``side_b`` → ``side_c`` の順に検査）
        - 三角不等式が厳密に成り立つこと

    Args:
        a: 辺 A。
        b: 辺 B。
        c: 辺 C。
        subject: エラーメッセージの主語（例: ``"New sides"``）。

    Raises:
        OutOfRangeError: 最初に見つかった 0 以下の辺。
        InvalidArgumentError: 三角不等式を満たさない場合。
    """
    for value, field in zip((a, b, c), SIDE_FIELDS):
        require_positive(value, field)

    if not satisfies_triangle_inequality(a, b, c):
        raise InvalidArgumentError(
            f"{subject} {a:.2f}, {b:.2f}, {c:.2f} do not form a valid triangle",
            (a, b, c),
        )


def sorted_sides(a: float, b: float, c: float) -> tuple[float, float, float]:
    """辺を昇順に並べ替える。最後の要素が斜辺候補になる。"""
    low, mid, high = sorted((a, b, c))
    return low, mid, high


def satisfies_right_angle(cathetus1: float, cathetus2: float, hypotenuse: float) -> bool:
    """``cathetus1² + cathetus2² ≈ hypotenuse²`` が許容誤差内で成り立つか判定する。"""
    return are_equal(cathetus1 * cathetus1 + cathetus2 * cathetus2, hypotenuse * hypotenuse)


def classify_triangle(a: float, b: float, c: float) -> TriangleType:
    """3 辺から三角形の種別を判定する。

    正三角形の判定を二等辺三角形より先に行う。

    Args:
        a: 辺 A。
        b: 辺 B。
        c: 辺 C。

    Returns:
        三角不等式を満たさなければ ``INVALID``、それ以外は
        ``EQUILATERAL`` / ``ISOSCELES`` / ``SCALENE`` のいずれか。

    Example::

        classify_triangle(5, 5, 8)   # -> TriangleType.ISOSCELES
        classify_triangle(1, 2, 10)  # -> TriangleType.INVALID
    """
    if not satisfies_triangle_inequality(a, b, c):
        return TriangleType.INVALID
    if are_equal(a, b) and are_equal(b, c):
        return TriangleType.EQUILATERAL
    if are_equal(a, b) or are_equal(b, c) or are_equal(a, c):
        return TriangleType.ISOSCELES
    return TriangleType.SCALENE
