"""
元素存取介面

表格擷取等工具只透過這層窄介面碰觸 DOM，不直接依賴 driver 內部：
    find_descendants(base, selector) -> list[handle]
    find_descendant(base, selector)  -> handle
    text(handle)                     -> str

selector 以 "." / "/" / "(" 開頭視為 XPath，其餘視為 CSS selector。
"""

from typing import Any, Protocol

from selenium.common.exceptions import NoSuchElementException
from selenium.webdriver.common.by import By

from core.exceptions import ElementNotFoundError

# 表格固定 selector
HEADER_LOCATOR = "tr th"
ROW_LOCATOR = "./tbody/tr"
CELL_LOCATOR = "td"

_XPATH_PREFIXES = (".", "/", "(")


def to_locator(selector: str) -> tuple:
    """把 selector 字串轉成 (By, value)"""
    if selector.startswith(_XPATH_PREFIXES):
        return (By.XPATH, selector)
    return (By.CSS_SELECTOR, selector)


class ElementAccess(Protocol):
    """元素存取能力"""

    def find_descendants(self, base: Any, selector: str) -> list: ...

    def find_descendant(self, base: Any, selector: str) -> Any: ...

    def text(self, handle: Any) -> str: ...


class SeleniumElementAccess:
    """以 Selenium WebElement / WebDriver 實作 ElementAccess"""

    def find_descendants(self, base, selector: str) -> list:
        return base.find_elements(*to_locator(selector))

    def find_descendant(self, base, selector: str):
        locator = to_locator(selector)
        try:
            return base.find_element(*locator)
        except NoSuchElementException as e:
            raise ElementNotFoundError(locator) from e

    def text(self, handle) -> str:
        return handle.text
