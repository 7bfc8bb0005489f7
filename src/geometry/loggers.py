"""図形が計算結果やライフサイクルイベントを報告するためのロガー。

図形は ``ShapeLogger`` プロトコルを満たす任意のオブジェクトを
コンストラクタで受け取る。ロガーは図形について何も知らない
（一方向の依存のみ）。

ロガーの失敗は図形の計算に伝播させない。書き込みエラーは
標準 ``logging`` へ診断メッセージを出して破棄する。

クラス:
    ConsoleLogger:   標準出力へ出力
    FileLogger:      ファイルへ追記（コンテキストマネージャ対応）
    StandardLogger:  標準 ``logging`` へ転送
    RecordingLogger: メモリ上に保持（テスト・検査用）
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from types import TracebackType
from typing import Protocol, TextIO

from geometry.config import (
    CONSOLE_TIMESTAMP_FORMAT,
    DEFAULT_LOG_PATH,
    FILE_TIMESTAMP_FORMAT,
    LOG_PREFIX,
)

logger = logging.getLogger(__name__)


class ShapeLogger(Protocol):
    """図形が利用するロギング能力。"""

    def log_info(self, message: str) -> None:
        """情報メッセージを 1 件記録する。例外は送出しない。"""
        ...


def format_line(message: str, timestamp_format: str, now: datetime | None = None) -> str:
    """``[LOG] <timestamp>: <message>`` 形式の 1 行を組み立てる。"""
    stamp = (now or datetime.now()).strftime(timestamp_format)
    return f"{LOG_PREFIX} {stamp}: {message}"


class ConsoleLogger:
    """タイムスタンプ付きの行を標準出力へ書き出す。"""

    def log_info(self, message: str) -> None:
        try:
            print(format_line(message, CONSOLE_TIMESTAMP_FORMAT))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to write to stdout: %s", exc)


class FileLogger:
    """タイムスタンプ付きの行をファイルへ追記する。

    ファイルは生成時に追記モードで開き、``close()`` または
    ``with`` ブロックの終了で確実に閉じる。ファイナライザには依存しない。
    書き込みはロックで直列化し、1 行ごとに flush する。

    Attributes:
        path: 出力先のファイルパス。

    Example::

        with FileLogger("geometry.log") as log:
            triangle = Triangle(3, 4, 5, log)
    """

    def __init__(self, path: str = DEFAULT_LOG_PATH) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._stream: TextIO | None = open(path, "a", encoding="utf-8")

    @property
    def closed(self) -> bool:
        return self._stream is None

    def log_info(self, message: str) -> None:
        line = format_line(message, FILE_TIMESTAMP_FORMAT)
        with self._lock:
            if self._stream is None:
                logger.warning("FileLogger(%s) is closed, dropping: %s", self.path, message)
                return
            try:
                self._stream.write(line + "\n")
                self._stream.flush()
            except (OSError, ValueError) as exc:
                logger.warning("Failed to write to %s: %s", self.path, exc)

    def close(self) -> None:
        """ファイルハンドルを解放する。複数回呼んでもよい。"""
        with self._lock:
            if self._stream is not None:
                self._stream.close()
                self._stream = None

    def __enter__(self) -> FileLogger:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class StandardLogger:
    """メッセージを標準 ``logging`` の INFO レベルへ転送する。"""

    def __init__(self, name: str = "geometry.shapes") -> None:
        self._logger = logging.getLogger(name)

    def log_info(self, message: str) -> None:
        self._logger.info("%s", message)


class RecordingLogger:
    """受け取ったメッセージをそのまま ``messages`` に保持する。"""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def log_info(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()
