"""図形モデルのデモンストレーション。

公開操作のみを使い、以下を順に表示する:

1. 三角形の種別判定（``Classifiable``）
2. ``Shape`` としての多態的な周長・面積計算と比較
3. 詳細情報の表示（``Describable``）
4. 多角形としての性質（``Polygonal``）
5. 辺の一括更新
6. 検証エラーの捕捉

使い方:
    python -m geometry [--log-file PATH]
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from geometry.config import DEFAULT_LOG_PATH, REPORT
from geometry.errors import ShapeError
from geometry.loggers import ConsoleLogger, FileLogger, ShapeLogger
from geometry.shapes import Circle, RightTriangle, Shape, Triangle, largest_by
from observability.tracing import init_tracer

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 60


def _sides_text(triangle: Triangle) -> str:
    return ", ".join(
        f"{label}={REPORT.number(value)}" for label, value in zip("abc", triangle.sides)
    )


def demonstrate_classification(console: ShapeLogger, file_log: ShapeLogger) -> None:
    triangles: list[tuple[str, Triangle]] = [
        ("Triangle 1", Triangle(5, 6, 7, console)),
        ("Triangle 2", RightTriangle.from_legs(3, 4, file_log)),
    ]
    for label, triangle in triangles:
        print(f"{label}:")
        print(f"  Type: {triangle.get_triangle_type()}")
        print(f"  Sides: {_sides_text(triangle)}")
        print(f"  Valid: {triangle.is_valid_triangle()}")
        print()


def demonstrate_polymorphism(console: ShapeLogger, file_log: ShapeLogger) -> None:
    shapes: list[Shape] = [
        Triangle(8, 10, 12, console),
        RightTriangle.from_legs(5, 12, console),
        Circle(7.5, file_log),
    ]
    for index, shape in enumerate(shapes, start=1):
        print(f"Shape #{index}: {shape.name}")
        print(f"  Perimeter: {REPORT.number(shape.calculate_perimeter())}")
        print(f"  Area: {REPORT.number(shape.calculate_area())}")
        print()

    by_perimeter, perimeter = largest_by(shapes, "perimeter")
    by_area, area = largest_by(shapes, "area")
    print("Comparison:")
    print(f"  Largest perimeter: {REPORT.number(perimeter)} ({by_perimeter.name})")
    print(f"  Largest area: {REPORT.number(area)} ({by_area.name})")


def demonstrate_descriptions(console: ShapeLogger, file_log: ShapeLogger) -> None:
    shapes: list[Shape] = [
        Triangle(6, 8, 10, console),
        RightTriangle.from_legs(3, 4, file_log),
        Circle(5, console),
    ]
    for shape in shapes:
        shape.print_info()
        print("-" * 40)


def demonstrate_polygons(console: ShapeLogger) -> None:
    polygons: list[Triangle] = [
        Triangle(5, 7, 9, console),
        RightTriangle.from_legs(6, 8, console),
    ]
    for polygon in polygons:
        print(f"{polygon.name}:")
        print(f"  Sides: {polygon.sides_count()}")
        print(f"  Convex: {REPORT.flag(polygon.is_convex())}")
        print(f"  Perimeter: {REPORT.number(polygon.calculate_perimeter())}")
        print(f"  Area: {REPORT.number(polygon.calculate_area())}")
        print()


def demonstrate_update(console: ShapeLogger) -> None:
    triangle = Triangle(3, 4, 5, console)
    print(f"Initial sides: {_sides_text(triangle)}")
    print(f"  Area: {REPORT.number(triangle.calculate_area())}")

    triangle.update_sides(5, 12, 13)
    print(f"Updated sides: {_sides_text(triangle)}")
    print(f"  Area: {REPORT.number(triangle.calculate_area())}")


def demonstrate_validation(console: ShapeLogger) -> list[ShapeError]:
    """不正な入力を順に試し、捕捉した例外を返す。"""
    existing = Triangle(3, 4, 5, console)
    attempts = [
        ("Negative side", lambda: Triangle(-3, 4, 5, console)),
        ("Invalid triangle (1, 2, 10)", lambda: Triangle(1, 2, 10, console)),
        ("Non-right triangle (3, 4, 6)", lambda: RightTriangle.from_sides(3, 4, 6, console)),
        ("Update to invalid sides", lambda: existing.update_sides(1, 2, 20)),
        ("Negative radius", lambda: Circle(-5, console)),
    ]

    caught: list[ShapeError] = []
    for number, (title, attempt) in enumerate(attempts, start=1):
        print(f"Test {number}: {title}...")
        try:
            attempt()
        except ShapeError as exc:
            caught.append(exc)
            print(f"  Caught {type(exc).__name__}: {exc}")
        else:
            print("  Not rejected")
    print(f"Sides after failed update: {_sides_text(existing)}")
    return caught


def run(log_path: str = DEFAULT_LOG_PATH) -> None:
    """全デモを順に実行する。ファイルロガーは終了時に必ず閉じる。"""
    console = ConsoleLogger()
    with FileLogger(log_path) as file_log:
        sections = [
            ("1. Classification", lambda: demonstrate_classification(console, file_log)),
            ("2. Polymorphism through Shape", lambda: demonstrate_polymorphism(console, file_log)),
            ("3. Detailed descriptions", lambda: demonstrate_descriptions(console, file_log)),
            ("4. Polygons", lambda: demonstrate_polygons(console)),
            ("5. Updating sides", lambda: demonstrate_update(console)),
            ("6. Validation and error handling", lambda: demonstrate_validation(console)),
        ]
        for title, section in sections:
            print(f"--- {title} ---\n")
            section()
            print(f"\n{SEPARATOR}\n")
    logger.info("FileLogger closed: %s", log_path)
    print(f"Logs written to {log_path}")


def main(argv: Sequence[str] | None = None) -> int:
    """デモを実行し、終了コードを返す。"""
    parser = argparse.ArgumentParser(description="Geometric shapes demonstration")
    parser.add_argument("--log-file", default=DEFAULT_LOG_PATH, help="append-only log file")
    parser.add_argument("--trace", action="store_true", help="export spans to the console")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if args.trace:
        init_tracer(enable_console_export=True)

    try:
        run(args.log_file)
    except Exception:
        logger.exception("Demonstration failed")
        return 1
    return 0
