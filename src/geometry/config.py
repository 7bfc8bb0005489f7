"""図形ライブラリの設定値。

数値許容誤差・ログ出力先・レポート書式をここに集約し、
各モジュールへの直書きを避ける。
"""

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# 数値計算
# ---------------------------------------------------------------------------

# 幾何学的関係（分類・直角判定）の比較に用いる絶対許容誤差
TOLERANCE = 1e-4

# ---------------------------------------------------------------------------
# ログ出力
# ---------------------------------------------------------------------------

DEFAULT_LOG_PATH = "geometry.log"
CONSOLE_TIMESTAMP_FORMAT = "%H:%M:%S"
FILE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_PREFIX = "[LOG]"

# トレーサーのサービス名（observability.tracing が参照する）
SERVICE_NAME = "geometry-shapes"

# ---------------------------------------------------------------------------
# レポート書式
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ReportSettings:
    """``describe()`` / ``detailed_info()`` の書式設定。

    不変条件 (Invariant):
        - ``decimals`` は 0 以上であること
        - ``yes_label`` / ``no_label`` は空文字列ではないこと

    Attributes:
        decimals: 実数の小数点以下桁数。
        yes_label: 真偽値 True の表示。
        no_label: 真偽値 False の表示。
    """

    decimals: int = 2
    yes_label: str = "Yes"
    no_label: str = "No"

    def __post_init__(self) -> None:
        assert self.decimals >= 0, f"decimals must be >= 0, got {self.decimals}"
        assert self.yes_label, "yes_label must not be empty"
        assert self.no_label, "no_label must not be empty"

    def number(self, value: float) -> str:
        """実数を固定小数点で整形する。"""
        return f"{value:.{self.decimals}f}"

    def flag(self, value: bool) -> str:
        """真偽値をラベルに変換する。"""
        return self.yes_label if value else self.no_label


REPORT = ReportSettings()
