"""
自訂 Exception 體系

統一的錯誤處理階層，讓每種失敗都有明確的分類與訊息。
上層可以 catch 大類別 (如 AutomationFrameworkError)，
也可以精準 catch 子類別 (如 ElementNotFoundError)。

Exception 樹：
    AutomationFrameworkError
    ├── WaitTimeoutError
    ├── PageError
    │   ├── ElementLookupError
    │   │   └── ElementNotFoundError
    │   ├── ElementNotClickableError
    │   └── ElementNotVisibleError
    ├── QueryError
    │   ├── MalformedTemplateError
    │   └── MessageSearchError
    ├── ConfigError
    │   ├── ConfigFileNotFoundError
    │   └── InvalidConfigError
    └── TestDataError
        └── DataFileNotFoundError
"""


class AutomationFrameworkError(Exception):
    """框架所有例外的基底，catch 這個就能攔截一切框架錯誤"""

    def __init__(self, message: str = "", context: dict | None = None):
        self.context = context or {}
        super().__init__(message)


# ── Wait 相關 ──

class WaitTimeoutError(AutomationFrameworkError, TimeoutError):
    """條件在期限內始終未成立"""

    def __init__(
        self,
        message: str = "",
        timeout_ms: int = 0,
        cause: Exception | None = None,
    ):
        self.timeout_ms = timeout_ms
        self.cause = cause
        msg = message or f"等待逾時 ({timeout_ms}ms)"
        if cause is not None:
            msg += f" | 最後的例外: {type(cause).__name__}: {cause}"
        super().__init__(msg, context={"timeout_ms": timeout_ms})
        if cause is not None:
            self.__cause__ = cause


# ── Page / Element 相關 ──

class PageError(AutomationFrameworkError):
    """頁面操作相關錯誤"""


class ElementLookupError(PageError):
    """元素存取層無法解析所需的元素"""


class ElementNotFoundError(ElementLookupError):
    """找不到指定元素"""

    def __init__(self, locator: tuple = (), timeout_ms: int = 0):
        msg = f"找不到元素: {locator}"
        if timeout_ms:
            msg += f" (等待 {timeout_ms}ms)"
        super().__init__(msg, context={"locator": locator, "timeout_ms": timeout_ms})


class ElementNotClickableError(PageError):
    """元素無法點擊"""

    def __init__(self, locator: tuple = ()):
        super().__init__(f"元素無法點擊: {locator}", context={"locator": locator})


class ElementNotVisibleError(PageError):
    """元素不可見"""

    def __init__(self, locator: tuple = ()):
        super().__init__(f"元素不可見: {locator}", context={"locator": locator})


# ── Query 相關 ──

class QueryError(AutomationFrameworkError):
    """查詢樣板或郵件搜尋相關錯誤"""


class MalformedTemplateError(QueryError):
    """查詢樣板中沒有任何 %PLACEHOLDER%"""

    def __init__(self, template: str = ""):
        super().__init__(
            f"查詢樣板沒有任何參數: '{template}'",
            context={"template": template},
        )


class MessageSearchError(QueryError):
    """郵件搜尋 API 回應非 2xx"""

    def __init__(self, status_code: int = 0, url: str = ""):
        super().__init__(
            f"郵件搜尋失敗: HTTP {status_code} ({url})",
            context={"status_code": status_code, "url": url},
        )


# ── Config 相關 ──

class ConfigError(AutomationFrameworkError):
    """設定相關錯誤"""


class ConfigFileNotFoundError(ConfigError):
    """找不到設定檔"""

    def __init__(self, path: str = ""):
        super().__init__(f"找不到設定檔: {path}", context={"path": path})


class InvalidConfigError(ConfigError):
    """設定值無效"""

    def __init__(self, key: str = "", value: str = "", reason: str = ""):
        msg = f"設定值無效: {key}={value}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, context={"key": key, "value": value})


# ── Test Data 相關 ──

class TestDataError(AutomationFrameworkError):
    """測試資料相關錯誤"""


class DataFileNotFoundError(TestDataError):
    """找不到測試資料檔案"""

    def __init__(self, path: str = ""):
        super().__init__(f"找不到測試資料: {path}", context={"path": path})
