"""二次元図形（三角形・直角三角形・円）のモデルとロガー。"""

from geometry.errors import (
    InvalidArgumentError,
    InvalidStateError,
    OutOfRangeError,
    ShapeError,
)
from geometry.loggers import (
    ConsoleLogger,
    FileLogger,
    RecordingLogger,
    ShapeLogger,
    StandardLogger,
)
from geometry.protocols import Classifiable, Describable, Measurable, Polygonal
from geometry.shapes import Circle, RightTriangle, Shape, Triangle, largest_by
from geometry.validation import TriangleType, are_equal, classify_triangle

__all__ = [
    "Circle",
    "Classifiable",
    "ConsoleLogger",
    "Describable",
    "FileLogger",
    "InvalidArgumentError",
    "InvalidStateError",
    "Measurable",
    "OutOfRangeError",
    "Polygonal",
    "RecordingLogger",
    "RightTriangle",
    "Shape",
    "ShapeError",
    "ShapeLogger",
    "StandardLogger",
    "Triangle",
    "TriangleType",
    "are_equal",
    "classify_triangle",
    "largest_by",
]
