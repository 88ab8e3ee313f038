"""
等待工具 (Poll Engine)
所有元素可見性、狀態收斂的等待最後都走這裡。

兩個入口，行為刻意不同：
- wait_until(): 嚴格模式。condition 拋出的例外立即往上拋、不重試；
  逾時拋出 WaitTimeoutError。
- exists():     寬鬆模式。condition 的例外視為「尚未成立」，
  期限到了回傳 False，不拋例外。

用法：
    from utils.wait_helper import PollEngine

    engine = PollEngine()

    # UI 收斂（長等待）
    engine.wait_until(lambda: page.get_text(STATUS) == "Active", "狀態未變為 Active")

    # 存在性檢查（短等待）
    if engine.exists(lambda: driver.find_elements(*ERROR_BANNER)):
        ...

    # 自訂時間 / 忽略特定例外
    engine.wait_until(
        cond, "訂單未出現",
        timeout_ms=10000, interval_ms=200,
        ignoring=(StaleElementReferenceException,),
    )
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from config.config import Config, Timeouts, WaitSpec, positive_int
from core.exceptions import WaitTimeoutError
from utils.logger import logger

T = TypeVar("T")

__all__ = ["WaitSpec", "WaitOutcome", "PollEngine", "wait_until", "exists"]


@dataclass(frozen=True)
class WaitOutcome:
    """一次輪詢的結果，寬鬆模式在入口處才收斂成 bool"""

    satisfied: bool
    value: Any = None
    error: Exception | None = None
    attempts: int = 0


class PollEngine:
    """
    有上限的條件輪詢

    - timeout / interval 皆為毫秒
    - 逾時以第一次評估開始的實際經過時間計算，不是以次數計算
    - interval 照設定值 sleep，不扣除 condition 本身花費的時間
    - 最後一次 sleep 會截到剩餘時間，確保在期限內結束
    """

    def __init__(self, timeouts: Timeouts | None = None):
        self.timeouts = timeouts or Config.timeouts()

    # ── 輪詢核心 ──

    def poll(
        self,
        condition: Callable[[], T],
        spec: WaitSpec,
        ignoring: tuple = (),
    ) -> WaitOutcome:
        """
        反覆評估 condition 直到回傳 truthy 或逾時。

        Args:
            condition: 無參數 callable，回傳 truthy 視為成立
            spec: 逾時與間隔設定
            ignoring: 視為「尚未成立」的例外類型，其餘例外直接往上拋

        Returns:
            WaitOutcome；逾時時 satisfied=False，error 為最後一次被忽略的例外
        """
        deadline = time.monotonic() + spec.timeout_ms / 1000
        interval = spec.interval_ms / 1000
        attempts = 0
        last_error = None

        while True:
            attempts += 1
            try:
                result = condition()
            except ignoring as e:
                last_error = e
                result = None
            if result:
                return WaitOutcome(True, result, last_error, attempts)

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return WaitOutcome(False, result, last_error, attempts)
            time.sleep(min(interval, remaining))

    # ── 嚴格模式 ──

    def wait(self, condition: Callable[[], T], spec: WaitSpec, ignoring: tuple = ()) -> T:
        """以指定的 WaitSpec 等待，逾時拋出 WaitTimeoutError"""
        logger.debug(
            f"Wait until: {spec.message or condition!r} "
            f"(timeout={spec.timeout_ms}ms, interval={spec.interval_ms}ms)"
        )
        try:
            outcome = self.poll(condition, spec, ignoring)
        except Exception as e:
            logger.error(f"等待條件拋出例外: {spec.message} | {type(e).__name__}: {e}")
            raise
        if outcome.satisfied:
            return outcome.value

        logger.error(
            f"等待逾時: {spec.message} "
            f"(timeout={spec.timeout_ms}ms, 評估 {outcome.attempts} 次)"
        )
        raise WaitTimeoutError(spec.message, spec.timeout_ms, cause=outcome.error)

    def wait_until(
        self,
        condition: Callable[[], T],
        message: str,
        timeout_ms: int | None = None,
        interval_ms: int | None = None,
        ignoring: tuple = (),
    ) -> T:
        """
        等待 condition 成立（預設長等待 profile）。

        Returns:
            condition 第一次回傳的 truthy 值

        Raises:
            WaitTimeoutError: 超過 timeout_ms 仍未成立
            InvalidConfigError: timeout_ms / interval_ms 不是正整數
            condition 拋出的例外（不在 ignoring 內時立即拋出）
        """
        spec = self._resolve(self.timeouts.long(message), timeout_ms, interval_ms)
        return self.wait(condition, spec, ignoring)

    # ── 寬鬆模式 ──

    def exists(
        self,
        condition: Callable[[], Any],
        message: str = "",
        timeout_ms: int | None = None,
        interval_ms: int | None = None,
    ) -> bool:
        """
        存在性檢查（預設短等待 profile）。

        condition 的任何例外與逾時都轉成 False，不往上拋。
        """
        spec = self._resolve(self.timeouts.short(message), timeout_ms, interval_ms)
        outcome = self.poll(condition, spec, ignoring=(Exception,))
        if outcome.satisfied:
            return True

        detail = f" | 最後的例外: {outcome.error}" if outcome.error else ""
        logger.info(f"條件未成立: {message or condition!r} ({spec.timeout_ms}ms){detail}")
        return False

    @staticmethod
    def _resolve(base: WaitSpec, timeout_ms: int | None, interval_ms: int | None) -> WaitSpec:
        """以呼叫端指定的毫秒數覆蓋 profile，非正整數拋出 InvalidConfigError"""
        if timeout_ms is not None:
            timeout_ms = positive_int("timeout_ms", timeout_ms)
        if interval_ms is not None:
            interval_ms = positive_int("interval_ms", interval_ms)
        return WaitSpec(
            timeout_ms if timeout_ms is not None else base.timeout_ms,
            interval_ms if interval_ms is not None else base.interval_ms,
            base.message,
        )


def wait_until(
    condition: Callable[[], T],
    message: str,
    timeout_ms: int | None = None,
    interval_ms: int | None = None,
) -> T:
    """用全域設定的 PollEngine 做嚴格等待"""
    return PollEngine().wait_until(condition, message, timeout_ms, interval_ms)


def exists(
    condition: Callable[[], Any],
    message: str = "",
    timeout_ms: int | None = None,
    interval_ms: int | None = None,
) -> bool:
    """用全域設定的 PollEngine 做存在性檢查"""
    return PollEngine().exists(condition, message, timeout_ms, interval_ms)
