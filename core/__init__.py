"""
core — 框架核心

用法：
    from core import BasePage
    from core import ElementNotFoundError, WaitTimeoutError
"""

from core.exceptions import (
    AutomationFrameworkError,
    ConfigError,
    ConfigFileNotFoundError,
    DataFileNotFoundError,
    ElementLookupError,
    ElementNotClickableError,
    ElementNotFoundError,
    ElementNotVisibleError,
    InvalidConfigError,
    MalformedTemplateError,
    MessageSearchError,
    PageError,
    QueryError,
    TestDataError,
    WaitTimeoutError,
)


def __getattr__(name):
    # BasePage 依賴 config / utils，延遲載入以免循環 import
    if name == "BasePage":
        from core.base_page import BasePage
        return BasePage
    raise AttributeError(f"module 'core' has no attribute {name!r}")


__all__ = [
    "BasePage",
    "AutomationFrameworkError",
    "WaitTimeoutError",
    "PageError",
    "ElementLookupError",
    "ElementNotFoundError",
    "ElementNotClickableError",
    "ElementNotVisibleError",
    "QueryError",
    "MalformedTemplateError",
    "MessageSearchError",
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidConfigError",
    "TestDataError",
    "DataFileNotFoundError",
]
