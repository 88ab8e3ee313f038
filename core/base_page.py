"""
Page Object 基底類別

所有 Page Object 都繼承此類，提供通用的元素操作方法：
- 元素等待與查找 (WebDriverWait)
- 點擊、輸入、下拉選單
- 條件等待 / 存在性檢查 (PollEngine)
- 表格讀取 (TableHelper)
"""

from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import Select, WebDriverWait

from config.config import Config
from core.element_access import SeleniumElementAccess
from core.exceptions import (
    ElementNotClickableError,
    ElementNotFoundError,
    ElementNotVisibleError,
)
from utils.logger import logger
from utils.table_helper import TableHelper
from utils.wait_helper import PollEngine


class BasePage:
    """Page Object 基底類別"""

    def __init__(self, driver, timeout_ms: int | None = None,
                 poll_engine: PollEngine | None = None):
        self.driver = driver
        self.timeout_ms = timeout_ms or Config.EXPLICIT_WAIT_MS
        self.wait = WebDriverWait(driver, self.timeout_ms / 1000)
        self.poll = poll_engine or PollEngine()
        self.tables = TableHelper(SeleniumElementAccess())

    # ── 元素查找 ──

    def find_element(self, locator: tuple) -> WebElement:
        """等待元素出現並回傳"""
        try:
            return self.wait.until(EC.presence_of_element_located(locator))
        except Exception as e:
            raise ElementNotFoundError(locator, self.timeout_ms) from e

    def find_elements(self, locator: tuple) -> list[WebElement]:
        """等待至少一個元素出現並回傳列表"""
        self.find_element(locator)
        return self.driver.find_elements(*locator)

    def wait_for_clickable(self, locator: tuple) -> WebElement:
        """等待元素可點擊"""
        try:
            return self.wait.until(EC.element_to_be_clickable(locator))
        except Exception as e:
            raise ElementNotClickableError(locator) from e

    def wait_for_visible(self, locator: tuple) -> WebElement:
        """等待元素可見"""
        try:
            return self.wait.until(EC.visibility_of_element_located(locator))
        except Exception as e:
            raise ElementNotVisibleError(locator) from e

    # ── 條件等待 ──

    def wait_until(self, condition, message: str,
                   timeout_ms: int | None = None, interval_ms: int | None = None):
        """等待條件成立，逾時拋出 WaitTimeoutError"""
        return self.poll.wait_until(condition, message, timeout_ms, interval_ms)

    def element_exists(self, locator: tuple) -> bool:
        """短等待內元素是否存在（不拋出例外）"""
        return self.poll.exists(
            lambda: len(self.driver.find_elements(*locator)) > 0,
            f"{locator}: 元素不存在",
        )

    def is_existing_with_wait(self, locator: tuple) -> bool:
        """長等待內元素是否存在（不拋出例外）"""
        spec = self.poll.timeouts.long()
        return self.poll.exists(
            lambda: len(self.driver.find_elements(*locator)) > 0,
            f"{locator}: 元素不存在",
            timeout_ms=spec.timeout_ms,
            interval_ms=spec.interval_ms,
        )

    # ── 元素操作 ──

    def click(self, locator: tuple) -> None:
        logger.info(f"點擊元素: {locator}")
        self.wait_for_clickable(locator).click()

    def set_value(self, locator: tuple, value) -> None:
        """清除後輸入值"""
        logger.info(f"輸入值: '{value}' -> {locator}")
        element = self.wait_for_visible(locator)
        element.clear()
        element.send_keys(str(value))

    def get_text(self, locator: tuple) -> str:
        logger.info(f"讀取文字: {locator}")
        return self.wait_for_visible(locator).text

    def get_attribute(self, locator: tuple, attribute: str) -> str:
        return self.find_element(locator).get_attribute(attribute)

    def select_by_value(self, locator: tuple, value: str) -> None:
        """等待下拉選單出現該選項後選取"""
        logger.info(f"選取 '{value}' -> {locator}")
        element = self.wait_for_visible(locator)
        select = Select(element)
        self.wait_until(
            lambda: any(o.get_attribute("value") == value for o in select.options),
            f"{locator}: 下拉選單沒有選項 '{value}'",
        )
        select.select_by_value(value)

    # ── 表格 ──

    def table_columns(self, locator: tuple) -> dict[str, str]:
        """讀取單列表格 {header: 值}"""
        return self.tables.column_view(self.find_element(locator))

    def table_rows(self, locator: tuple, key_header: str) -> dict:
        """讀取表格 {key 欄位值: 整列}"""
        return self.tables.row_keyed_view(self.find_element(locator), key_header)
