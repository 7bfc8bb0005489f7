"""リポジトリのポリシーチェッカー。

ソースとテストを走査し、以下を検出する:

- 秘密情報パターン
- ホワイトリスト外の URL 直書き
- bare ``except:``（例外の握りつぶし）
- ライブラリモジュールでの ``print(``（コンソール向けモジュールを除く）

使い方:
    python ci/policy_check.py
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path

# ---------------------------------------------------------------------------
# 設定
# ---------------------------------------------------------------------------

REPO_ROOT = Path(__file__).resolve().parent.parent

SCAN_DIRS = ("src", "tests")

SCAN_EXTENSIONS = {".py", ".toml", ".txt", ".yml", ".yaml", ".md"}

SKIP_DIR_NAMES = {
    "__pycache__",
    ".git",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".hypothesis",
}

# 標準出力への表示が役割であるモジュール（print を許可）
PRINT_ALLOWED_FILES = {
    "src/geometry/loggers.py",
    "src/geometry/demo.py",
    "src/geometry/shapes.py",
}

# ---------------------------------------------------------------------------
# 禁止パターン
# ---------------------------------------------------------------------------

SECRET_PATTERNS: list[str] = [
    r"AKIA[0-9A-Z]{16}",  # AWS Access Key ID
    r"-----BEGIN\s+(RSA|DSA|EC|OPENSSH)\s+PRIVATE\s+KEY-----",  # SSH 秘密鍵
    r"ghp_[A-Za-z0-9_]{36,}",  # GitHub Personal Access Token
    r"sk-[A-Za-z0-9]{32,}",  # 汎用 API キー
]

URL_PATTERN = r"https?://[^\s\"')\]>]+"

URL_ALLOWLIST_PATTERNS: list[str] = [
    r"example\.com",
    r"github\.com",
    r"pypi\.org",
    r"docs\.python\.org",
    r"opentelemetry\.io",
    r"hypothesis\.readthedocs\.io",
]

BARE_EXCEPT_PATTERN = r"^\s*except\s*:"
PRINT_PATTERN = r"(?<![\w.])print\("


# ---------------------------------------------------------------------------
# ユーティリティ
# ---------------------------------------------------------------------------


def should_skip(path: Path) -> bool:
    """スキップ対象のディレクトリに含まれるか判定する。"""
    return any(name in SKIP_DIR_NAMES for name in path.parts)


def read_text_safely(path: Path) -> str | None:
    """ファイルを安全に読み込む。"""
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return None


def is_url_allowlisted(line: str) -> bool:
    """URL がホワイトリストに該当するか判定する。"""
    return any(re.search(pat, line) for pat in URL_ALLOWLIST_PATTERNS)


def is_comment_line(line: str) -> bool:
    return line.lstrip().startswith("#")


# ---------------------------------------------------------------------------
# スキャン
# ---------------------------------------------------------------------------


def scan_file(path: Path, root: Path = REPO_ROOT) -> list[str]:
    """1 ファイルをスキャンし、問題を返す。"""
    issues: list[str] = []
    text = read_text_safely(path)
    if text is None:
        return issues

    rel = path.relative_to(root).as_posix()
    is_python = path.suffix == ".py"
    is_library = is_python and rel.startswith("src/")

    if is_python:
        for lineno, line in enumerate(text.splitlines(), start=1):
            if is_comment_line(line):
                continue
            if re.search(URL_PATTERN, line) and not is_url_allowlisted(line):
                issues.append(f"外部接続疑い: URL直書き検出 in {rel}:{lineno}")
            if re.search(BARE_EXCEPT_PATTERN, line):
                issues.append(f"例外握りつぶし: bare except in {rel}:{lineno}")
            if is_library and rel not in PRINT_ALLOWED_FILES and re.search(PRINT_PATTERN, line):
                issues.append(f"print 検出: ロガーを使用すること in {rel}:{lineno}")

    for pat in SECRET_PATTERNS:
        if re.search(pat, text):
            issues.append(f"秘密情報疑い: パターン検出 ({pat}) in {rel}")

    return issues


def iter_scan_targets(root: Path, scan_dirs: Iterable[str] = SCAN_DIRS) -> list[Path]:
    """走査対象のファイルを列挙する。"""
    targets: list[Path] = []
    for name in scan_dirs:
        base = root / name
        if not base.exists():
            continue
        for path in sorted(base.rglob("*")):
            if path.is_file() and not should_skip(path) and path.suffix in SCAN_EXTENSIONS:
                targets.append(path)
    return targets


# ---------------------------------------------------------------------------
# メイン
# ---------------------------------------------------------------------------


def main(root: Path = REPO_ROOT) -> int:
    """ポリシーチェックを実行し、違反があれば非ゼロで終了する。"""
    issues: list[str] = []
    for path in iter_scan_targets(root):
        issues.extend(scan_file(path, root))

    if issues:
        print("[policy_check] FAILED")
        for i, msg in enumerate(issues, start=1):
            print(f"  {i}. {msg}")
        return 1

    print("[policy_check] OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
