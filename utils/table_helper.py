"""
表格擷取工具
把畫面上的 HTML table 轉成 dict，方便在測試中比對。

兩種視圖：
    column_view(table)
        {header1: 第一列的值, header2: 第一列的值, ...}
        只有單列表格才有意義，多列時只取第一列。

    row_keyed_view(table, "Date")
        {"10/25/18": {"Date": "10/25/18", "Total": "5"},
         "10/26/18": {"Date": "10/26/18", "Total": "9"}}
        key 欄位值重複時後面的列覆蓋前面的列。

header 與 cell 單純依欄位順序對齊，不處理 colspan / 不規則列。

用法：
    from utils.table_helper import TableHelper

    helper = TableHelper(SeleniumElementAccess())
    table = driver.find_element(By.ID, "usage-table")
    rows = helper.row_keyed_view(table, "Date")
"""

from core.element_access import CELL_LOCATOR, HEADER_LOCATOR, ROW_LOCATOR, ElementAccess
from utils.logger import logger


class TableHelper:
    """依 header 順序讀取表格內容"""

    def __init__(self, access: ElementAccess):
        self.access = access

    def headers(self, table) -> list[str]:
        """所有 header 文字，依文件順序"""
        return [
            self.access.text(header)
            for header in self.access.find_descendants(table, HEADER_LOCATOR)
        ]

    def column_view(self, table) -> dict[str, str]:
        """
        每個 header 對應第一列同欄位的值。

        Raises:
            ElementNotFoundError: 表格沒有任何資料列
        """
        columns: dict[str, str] = {}
        for index, header in enumerate(self.headers(table), start=1):
            cell = self.access.find_descendant(
                table, f"{ROW_LOCATOR}/{CELL_LOCATOR}[{index}]"
            )
            columns[header] = self.access.text(cell)
        logger.info(f"讀取表格欄位: {list(columns)}")
        return columns

    def rows(self, table) -> list[dict[str, str]]:
        """每一列轉成 {header: 值}，依列順序"""
        headers = self.headers(table)
        records = []
        for row in self.access.find_descendants(table, ROW_LOCATOR):
            record = {}
            for index, header in enumerate(headers, start=1):
                cell = self.access.find_descendant(row, f"./{CELL_LOCATOR}[{index}]")
                record[header] = self.access.text(cell)
            records.append(record)
        return records

    def row_keyed_view(self, table, key_header: str) -> dict:
        """
        以 key_header 欄位的值當 key 建立 {key: 整列}。

        key_header 不在 header 中時所有列的 key 都是 None，
        結果只剩最後一列。
        """
        keyed = {}
        for record in self.rows(table):
            keyed[record.get(key_header)] = record
        logger.info(f"讀取表格 {len(keyed)} 列 (key: {key_header})")
        return keyed
