"""テスト共通のフィクスチャとマーカー登録。"""

import pytest

from geometry.loggers import RecordingLogger


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "group_shape: tests for the common shape contract")
    config.addinivalue_line("markers", "group_triangle: tests for triangle behaviour")
    config.addinivalue_line("markers", "group_right_triangle: tests for right triangle behaviour")
    config.addinivalue_line("markers", "group_circle: tests for circle behaviour")
    config.addinivalue_line("markers", "group_logger: tests for logger sinks")


@pytest.fixture
def recorder() -> RecordingLogger:
    return RecordingLogger()
