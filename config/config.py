"""
設定管理模組
統一管理等待時間 profile、郵件 API 等設定。
支援透過環境變數覆蓋預設值，方便 CI/CD 整合。

等待時間一律以毫秒 (ms) 為單位，於程序啟動時從 timeouts.json 載入一次，
之後唯讀，不提供執行期修改的 API。
"""

import json
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from core.exceptions import ConfigFileNotFoundError, InvalidConfigError

CONFIG_DIR = Path(__file__).resolve().parent

TIMEOUTS_FILE = CONFIG_DIR / "timeouts.json"

# (profile, 種類) → 覆蓋用的環境變數
_TIMEOUT_ENV_KEYS = {
    ("long", "timeouts"): "LONG_TIMEOUT_MS",
    ("long", "intervals"): "LONG_INTERVAL_MS",
    ("short", "timeouts"): "SHORT_TIMEOUT_MS",
    ("short", "intervals"): "SHORT_INTERVAL_MS",
}


@dataclass(frozen=True)
class WaitSpec:
    """單次等待的參數：逾時、輪詢間隔 (毫秒) 與逾時訊息"""

    timeout_ms: int
    interval_ms: int
    message: str = ""


@dataclass(frozen=True)
class Timeouts:
    """
    全域等待時間設定（毫秒）

    long  : UI 收斂用的長等待
    short : 存在性檢查用的短等待（快速失敗）
    """

    long_timeout_ms: int
    long_interval_ms: int
    short_timeout_ms: int
    short_interval_ms: int

    def long(self, message: str = "") -> WaitSpec:
        """長等待 profile"""
        return WaitSpec(self.long_timeout_ms, self.long_interval_ms, message)

    def short(self, message: str = "") -> WaitSpec:
        """短等待 profile"""
        return WaitSpec(self.short_timeout_ms, self.short_interval_ms, message)


def positive_int(key: str, value) -> int:
    if isinstance(value, bool):
        raise InvalidConfigError(key, str(value), "必須是正整數")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidConfigError(key, str(value), "必須是正整數")
    if number <= 0 or (isinstance(value, float) and value != number):
        raise InvalidConfigError(key, str(value), "必須是正整數")
    return number


def load_timeouts(path: Path | str | None = None) -> Timeouts:
    """
    從 JSON 檔載入等待時間設定。

    檔案格式：
        {
            "timeouts":  {"long": 60000, "short": 5000},
            "intervals": {"long": 500,   "short": 250}
        }

    Args:
        path: 設定檔路徑，預設讀取 TIMEOUTS_FILE 環境變數或 config/timeouts.json

    Returns:
        Timeouts

    Raises:
        ConfigFileNotFoundError: 設定檔不存在
        InvalidConfigError: 欄位缺失或不是正整數
    """
    path = Path(path or os.getenv("TIMEOUTS_FILE") or TIMEOUTS_FILE)
    if not path.exists():
        raise ConfigFileNotFoundError(str(path))
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)

    values = {}
    for (profile, kind), env_key in _TIMEOUT_ENV_KEYS.items():
        key = f"{kind}.{profile}"
        value = os.getenv(env_key)
        if value is None:
            value = raw.get(kind, {}).get(profile)
        if value is None:
            raise InvalidConfigError(key, "", "缺少必填欄位")
        values[env_key] = positive_int(key, value)

    return Timeouts(
        long_timeout_ms=values["LONG_TIMEOUT_MS"],
        long_interval_ms=values["LONG_INTERVAL_MS"],
        short_timeout_ms=values["SHORT_TIMEOUT_MS"],
        short_interval_ms=values["SHORT_INTERVAL_MS"],
    )


@lru_cache(maxsize=None)
def _cached_timeouts() -> Timeouts:
    return load_timeouts()


class Config:
    """框架全域設定"""

    # WebDriverWait 等待 (毫秒)
    EXPLICIT_WAIT_MS = int(os.getenv("EXPLICIT_WAIT_MS", "15000"))

    # 郵件搜尋 API
    MAIL_API_BASE_URL = os.getenv("MAIL_API_BASE_URL", "https://gmail.googleapis.com")
    MAIL_API_TOKEN = os.getenv("MAIL_API_TOKEN", "")
    MAIL_USER_ID = os.getenv("MAIL_USER_ID", "me")

    @classmethod
    def timeouts(cls) -> Timeouts:
        """取得全域等待時間設定（程序內只載入一次）"""
        return _cached_timeouts()
