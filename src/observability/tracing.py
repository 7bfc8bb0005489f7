"""図形計算の計装モジュール。

周長・面積の計算や辺の更新を OpenTelemetry のスパンとして記録する。

OTel SDK がインストールされていない場合、デコレータはパススルー（no-op）
として動作し、既存コードに影響を与えない。SDK は ``otel`` extra で導入する::

    pip install -e ".[otel]"

関数:
    init_tracer:           TracerProvider の初期化
    get_tracer:            トレーサーの取得
    trace_shape_operation: 図形操作のトレース
"""

import functools
import logging
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

from geometry.config import SERVICE_NAME

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# 型変数（ParamSpec + TypeVar で mypy strict / Pylance 互換）
# ---------------------------------------------------------------------------

P = ParamSpec("P")
R = TypeVar("R")

_TRACER_NAME = "geometry.observability"

# ---------------------------------------------------------------------------
# OTel SDK のオプショナルインポート
# ---------------------------------------------------------------------------

_HAS_OTEL = False

try:
    from opentelemetry import trace
    from opentelemetry.sdk.resources import Resource
    from opentelemetry.sdk.trace import TracerProvider
    from opentelemetry.sdk.trace.export import (
        BatchSpanProcessor,
        ConsoleSpanExporter,
    )

    _HAS_OTEL = True
except ImportError:
    pass


# ---------------------------------------------------------------------------
# TracerProvider 初期化
# ---------------------------------------------------------------------------


def init_tracer(
    service_name: str = SERVICE_NAME,
    *,
    enable_console_export: bool = False,
) -> bool:
    """TracerProvider を初期化する。

    OTel SDK がインストールされていない場合は何もしない。

    Args:
        service_name: サービス名（リソース属性に設定）。
        enable_console_export: True の場合、コンソールへもスパンを出力する。

    Returns:
        トレーシングが有効化された場合は True。
    """
    if not _HAS_OTEL:
        logger.info("OpenTelemetry SDK 未インストールのためトレーシング無効")
        return False

    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    if enable_console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    logger.info("TracerProvider 初期化完了: service=%s", service_name)
    return True


def get_tracer() -> Any:
    """トレーサーのインスタンスを取得する。

    OTel SDK 未導入時は ``None`` を返す。
    """
    if not _HAS_OTEL:
        return None
    return trace.get_tracer(_TRACER_NAME)


# ---------------------------------------------------------------------------
# デコレータ: 図形操作
# ---------------------------------------------------------------------------


def trace_shape_operation(
    operation_name: str | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """図形の操作（計算・更新）をトレースするデコレータ。

    例外発生時は ``shape.status=error`` を記録し、例外を再送出する。
    OTel SDK がインストールされていない場合はパススルー。

    記録する属性:
        - shape.operation: 操作名
        - shape.type: 第 1 引数（self）のクラス名
        - shape.status: 実行結果（"success" / "error"）

    Args:
        operation_name: スパン名。省略時は関数の修飾名を使用する。

    Returns:
        デコレートされた関数。

    使用方法::

        class Circle(Shape):
            @trace_shape_operation("circle.area")
            def calculate_area(self) -> float:
                ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        tracer = get_tracer()
        if tracer is None:
            return func

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            name = operation_name or func.__qualname__
            shape_type = type(args[0]).__name__ if args else "unknown"
            with tracer.start_as_current_span(
                name,
                attributes={
                    "shape.operation": name,
                    "shape.type": shape_type,
                    "service.name": SERVICE_NAME,
                },
            ) as span:
                try:
                    result = func(*args, **kwargs)
                    span.set_attribute("shape.status", "success")
                    return result
                except Exception as exc:
                    span.set_attribute("shape.status", "error")
                    span.record_exception(exc)
                    raise

        return wrapper

    return decorator
