"""
郵件查詢樣板工具

查詢樣板以 %NAME% 標記參數，依出現順序對應位置參數：
    {
        "byOrderIdAndDate": "subject:%ORDER_ID% AND after:%DATE_VALUE%"
    }

    expand(template, "123", "2024-01-01")
    → "subject:123 AND after:2024-01-01"

QueryHelper 只負責組出查詢字串並交給 MessageSearchClient，
對遠端服務的輪詢由 client 的 count_by_query() 負責。
"""

import re
from dataclasses import replace

from core.exceptions import MalformedTemplateError
from utils.api_client import SearchRequest
from utils.data_loader import load_json
from utils.logger import logger

PLACEHOLDER_PATTERN = re.compile(r"%\w*?%")


def extract_placeholders(template: str) -> list[str]:
    """
    依出現順序取出所有 %NAME% 參數（重複的也保留）。

    Raises:
        MalformedTemplateError: 樣板中沒有任何參數
    """
    placeholders = PLACEHOLDER_PATTERN.findall(template)
    if not placeholders:
        raise MalformedTemplateError(template)
    return placeholders


def expand(template: str, *args) -> str:
    """
    第 i 個參數替換為第 i 個位置參數，每次只替換第一個出現處。

    參數不足時以空字串替換，多出的參數忽略。
    """
    placeholders = extract_placeholders(template)
    if len(args) < len(placeholders):
        logger.warning(
            f"查詢參數不足: 需要 {len(placeholders)} 個，只收到 {len(args)} 個",
            extra={"context": {"template": template}},
        )
    query = template
    for index, placeholder in enumerate(placeholders):
        value = str(args[index]) if index < len(args) else ""
        query = query.replace(placeholder, value, 1)
    return query


class QueryHelper:
    """以查詢樣板搜尋郵件"""

    def __init__(self, client, base_request: SearchRequest | None = None):
        self.client = client
        self.base_request = base_request or client.default_request()

    @staticmethod
    def load_templates(filename: str) -> dict[str, str]:
        """從 test_data/ 載入 {名稱: 樣板}"""
        return dict(load_json(filename))

    def build_request(self, template: str, *args) -> SearchRequest:
        """以 base_request 為基礎產生帶有查詢字串的新 request"""
        query = expand(template, *args)
        logger.info(f"郵件查詢: {query}")
        return replace(self.base_request, q=query)

    def search(self, template: str, *args) -> list[dict]:
        """取得符合查詢的郵件列表"""
        return self.client.search_by_query(self.build_request(template, *args))

    def search_until_count(self, expected_count: int, template: str, *args) -> int:
        """
        取得符合查詢的郵件數量，client 會輪詢直到數量達到 expected_count。

        Raises:
            WaitTimeoutError: client 等待逾時
        """
        request = self.build_request(template, *args)
        return self.client.count_by_query(expected_count, request)
