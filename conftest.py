"""
pytest 全域 fixtures

提供：
- timeouts / poll_engine：毫秒等級的短等待設定，單元測試不必真的等
- fake_access / make_table：記憶體內的表格，模擬元素存取層
- 測試失敗時寫入 log
"""

import re

import pytest

from config.config import Timeouts
from core.exceptions import ElementNotFoundError
from utils.logger import logger
from utils.wait_helper import PollEngine


# ── 等待設定 ──

@pytest.fixture
def timeouts() -> Timeouts:
    """單元測試用的等待時間 (ms)"""
    return Timeouts(
        long_timeout_ms=300,
        long_interval_ms=20,
        short_timeout_ms=100,
        short_interval_ms=10,
    )


@pytest.fixture
def poll_engine(timeouts) -> PollEngine:
    return PollEngine(timeouts)


# ── 假表格 ──

class FakeCell:
    def __init__(self, text: str):
        self.text = text


class FakeRow:
    def __init__(self, values: list[str]):
        self.cells = [FakeCell(v) for v in values]


class FakeTable:
    def __init__(self, headers: list[str], rows: list[list[str]]):
        self.headers = [FakeCell(h) for h in headers]
        self.rows = [FakeRow(r) for r in rows]


class FakeElementAccess:
    """只認得表格工具使用的固定 selector"""

    _FIRST_ROW_CELL = re.compile(r"^\./tbody/tr/td\[(\d+)\]$")
    _ROW_CELL = re.compile(r"^\./td\[(\d+)\]$")

    def __init__(self):
        self.text_calls = 0

    def find_descendants(self, base, selector: str) -> list:
        if selector == "tr th":
            return list(base.headers)
        if selector == "./tbody/tr":
            return list(base.rows)
        raise AssertionError(f"未預期的 selector: {selector}")

    def find_descendant(self, base, selector: str):
        match = self._FIRST_ROW_CELL.match(selector)
        if match:
            cells = base.rows[0].cells if base.rows else []
        else:
            match = self._ROW_CELL.match(selector)
            if not match:
                raise AssertionError(f"未預期的 selector: {selector}")
            cells = base.cells
        index = int(match.group(1))
        if index > len(cells):
            raise ElementNotFoundError(("xpath", selector))
        return cells[index - 1]

    def text(self, handle) -> str:
        self.text_calls += 1
        return handle.text


@pytest.fixture
def fake_access() -> FakeElementAccess:
    return FakeElementAccess()


@pytest.fixture
def make_table():
    """make_table(headers, rows) → FakeTable"""
    return FakeTable


# ── 測試生命週期 Hook ──

@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call" and report.failed:
        logger.error(f"測試失敗: {item.name}")
