"""
測試資料載入器
從 test_data/ 載入 JSON 測試資料，例如郵件查詢樣板。

test_data/ 放在 repo 根目錄，不隨套件安裝；請以 `pip install -e .` 在
repo 內執行，或用 TEST_DATA_DIR 環境變數指向資料目錄。

用法：
    from utils.data_loader import load_json

    queries = load_json("mail/queries.json")
"""

import json
import os
from pathlib import Path

from core.exceptions import DataFileNotFoundError

DATA_DIR = Path(__file__).resolve().parent.parent / "test_data"


def data_dir() -> Path:
    """目前的測試資料目錄（TEST_DATA_DIR 優先）"""
    return Path(os.getenv("TEST_DATA_DIR") or DATA_DIR)


def load_json(filename: str | Path):
    """
    從 JSON 檔載入測試資料。

    相對路徑以 data_dir() 為基準，絕對路徑直接讀取。

    Raises:
        DataFileNotFoundError: 檔案不存在
    """
    filepath = data_dir() / filename
    if not filepath.exists():
        raise DataFileNotFoundError(str(filepath))
    with open(filepath, "r", encoding="utf-8") as f:
        return json.load(f)
