"""
API Client 工具
用於 API + UI 混合測試：UI 下單後透過郵件 API 確認通知信是否寄出。

MessageSearchClient 以 Gmail REST API 的 messages.list 搜尋郵件，
count_by_query() 自己負責輪詢，直到數量達標或逾時。
"""

from dataclasses import dataclass

import requests

from config.config import Config
from core.exceptions import MessageSearchError
from utils.logger import logger
from utils.wait_helper import PollEngine


@dataclass(frozen=True)
class SearchRequest:
    """郵件搜尋條件，q 為查詢字串，其餘欄位由 client 使用"""

    q: str = ""
    user_id: str = "me"
    max_results: int = 100
    label_ids: tuple = ()
    include_spam_trash: bool = False

    def to_params(self, page_token: str | None = None) -> dict:
        params = {
            "q": self.q,
            "maxResults": self.max_results,
            "includeSpamTrash": str(self.include_spam_trash).lower(),
        }
        if self.label_ids:
            params["labelIds"] = list(self.label_ids)
        if page_token:
            params["pageToken"] = page_token
        return params


class ApiClient:
    """簡易 REST API 客戶端"""

    def __init__(self, base_url: str, timeout: int = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def set_token(self, token: str) -> None:
        """設定 Bearer Token"""
        self.session.headers["Authorization"] = f"Bearer {token}"

    def get(self, path: str, params: dict | None = None) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.info(f"[API] GET {url}")
        resp = self.session.get(url, params=params, timeout=self.timeout)
        logger.info(f"[API] Status: {resp.status_code}")
        return resp


class MessageSearchClient(ApiClient):
    """郵件搜尋客戶端"""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: int = 30,
        poll_engine: PollEngine | None = None,
    ):
        super().__init__(base_url, timeout)
        if token:
            self.set_token(token)
        self.poll_engine = poll_engine or PollEngine()

    @classmethod
    def from_config(cls, poll_engine: PollEngine | None = None) -> "MessageSearchClient":
        """依 Config.MAIL_API_* 建立 client"""
        return cls(Config.MAIL_API_BASE_URL, Config.MAIL_API_TOKEN or None,
                   poll_engine=poll_engine)

    def default_request(self) -> SearchRequest:
        """以 Config.MAIL_USER_ID 為信箱的空白 request"""
        return SearchRequest(user_id=Config.MAIL_USER_ID)

    def search_by_query(self, request: SearchRequest) -> list[dict]:
        """
        依 request.q 搜尋郵件，自動翻完所有分頁。

        Raises:
            MessageSearchError: API 回應非 2xx
        """
        path = f"/gmail/v1/users/{request.user_id}/messages"
        messages: list[dict] = []
        page_token = None
        while True:
            resp = self.get(path, params=request.to_params(page_token))
            if not resp.ok:
                raise MessageSearchError(resp.status_code, resp.url)
            body = resp.json()
            messages.extend(body.get("messages", []))
            page_token = body.get("nextPageToken")
            if not page_token:
                break
        logger.info(f"[API] 查詢 '{request.q}' 找到 {len(messages)} 封郵件")
        return messages

    def count_by_query(self, expected_count: int, request: SearchRequest) -> int:
        """
        輪詢直到郵件數量 >= expected_count，回傳實際數量。

        Raises:
            WaitTimeoutError: 長等待逾時仍未達到數量
        """
        found = {"count": 0}

        def enough():
            found["count"] = len(self.search_by_query(request))
            return found["count"] >= expected_count

        self.poll_engine.wait_until(
            enough,
            f"郵件數量未達 {expected_count} 封 (查詢: '{request.q}')",
        )
        return found["count"]
