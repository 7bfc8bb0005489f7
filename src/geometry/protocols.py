"""図形が提供する能力（capability）のプロトコル定義。

深い継承階層ではなく、独立した能力の組み合わせで図形を扱う。
構造的部分型なので、該当メソッドを持つクラスは明示的な継承なしに
プロトコルを満たす。

    Measurable:   周長・面積
    Classifiable: 三角形の種別
    Describable:  人間向けの複数行表示
    Polygonal:    辺の数・凸性
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from geometry.validation import TriangleType


@runtime_checkable
class Measurable(Protocol):
    """周長と面積を計算できる。"""

    def calculate_perimeter(self) -> float: ...

    def calculate_area(self) -> float: ...


@runtime_checkable
class Classifiable(Protocol):
    """三角形の種別を判定できる。"""

    def get_triangle_type(self) -> TriangleType: ...


@runtime_checkable
class Describable(Protocol):
    """人間向けの複数行テキストを返せる。"""

    def describe(self) -> str: ...

    def detailed_info(self) -> str: ...


@runtime_checkable
class Polygonal(Protocol):
    """多角形としての性質を持つ。"""

    def sides_count(self) -> int: ...

    def is_convex(self) -> bool: ...
