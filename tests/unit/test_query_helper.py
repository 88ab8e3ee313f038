"""
utils.query_helper 單元測試
驗證 %PLACEHOLDER% 解析、替換，以及交給郵件搜尋 client 的 request。
"""

import json
from unittest.mock import MagicMock

import pytest

from core.exceptions import MalformedTemplateError
from utils.api_client import SearchRequest
from utils.data_loader import DATA_DIR
from utils.query_helper import PLACEHOLDER_PATTERN, QueryHelper, expand, extract_placeholders

ORDER_QUERY = "subject:%ORDER_ID% AND after:%DATE_VALUE%"


def _client():
    client = MagicMock()
    client.default_request.return_value = SearchRequest()
    return client


@pytest.mark.unit
class TestExtractPlaceholders:
    """extract_placeholders"""

    @pytest.mark.unit
    def test_order_of_appearance(self):
        assert extract_placeholders(ORDER_QUERY) == ["%ORDER_ID%", "%DATE_VALUE%"]

    @pytest.mark.unit
    def test_duplicates_kept(self):
        assert extract_placeholders("%A% or %B% or %A%") == ["%A%", "%B%", "%A%"]

    @pytest.mark.unit
    def test_adjacent_tokens(self):
        assert extract_placeholders("%A%%B%") == ["%A%", "%B%"]

    @pytest.mark.unit
    def test_non_word_text_not_a_token(self):
        """% 之間有非 word 字元時不算參數"""
        assert extract_placeholders("100% off %CODE%") == ["%CODE%"]

    @pytest.mark.unit
    def test_empty_token(self):
        assert extract_placeholders("a %% b") == ["%%"]

    @pytest.mark.unit
    @pytest.mark.parametrize("template", ["subject:invoice", "", "50% off"])
    def test_no_placeholder_raises(self, template):
        with pytest.raises(MalformedTemplateError) as exc_info:
            extract_placeholders(template)
        assert exc_info.value.context["template"] == template

    @pytest.mark.unit
    def test_pattern_is_lazy(self):
        assert PLACEHOLDER_PATTERN.findall("%A%B%") == ["%A%"]


@pytest.mark.unit
class TestExpand:
    """expand"""

    @pytest.mark.unit
    def test_positional_substitution(self):
        assert expand(ORDER_QUERY, "123", "2024-01-01") == "subject:123 AND after:2024-01-01"

    @pytest.mark.unit
    def test_repeated_token_takes_next_argument(self):
        """重複的參數依掃描順序各自取下一個位置參數"""
        assert expand("%A% or %A%", "x", "y") == "x or y"

    @pytest.mark.unit
    def test_non_string_arguments(self):
        assert expand("older_than:%DAYS%d", 3) == "older_than:3d"

    @pytest.mark.unit
    def test_missing_arguments_become_empty(self):
        assert expand(ORDER_QUERY, "123") == "subject:123 AND after:"

    @pytest.mark.unit
    def test_extra_arguments_ignored(self):
        assert expand("to:%EMAIL%", "a@b.c", "unused") == "to:a@b.c"

    @pytest.mark.unit
    def test_argument_containing_percent(self):
        """替換值含參數文字時，下一次替換會先命中它"""
        assert expand("%A% %B%", "%B%", "2") == "2 %B%"

    @pytest.mark.unit
    def test_no_placeholder_raises(self):
        with pytest.raises(MalformedTemplateError):
            expand("subject:invoice", "123")

    @pytest.mark.unit
    @pytest.mark.parametrize("template", [
        ORDER_QUERY,
        "to:%EMAIL% newer_than:%DAYS%d",
        "%A%%B%%C%",
    ])
    def test_matching_arity_leaves_no_token(self, template):
        args = [f"v{i}" for i in range(len(extract_placeholders(template)))]
        assert not PLACEHOLDER_PATTERN.search(expand(template, *args))


@pytest.mark.unit
class TestQueryHelper:
    """QueryHelper"""

    @pytest.mark.unit
    def test_build_request_does_not_mutate_base(self):
        base = SearchRequest(max_results=10)
        helper = QueryHelper(MagicMock(), base_request=base)

        request = helper.build_request(ORDER_QUERY, "123", "2024-01-01")

        assert request.q == "subject:123 AND after:2024-01-01"
        assert request.max_results == 10
        assert base.q == ""

    @pytest.mark.unit
    def test_default_base_request_comes_from_client(self):
        """未指定 base_request 時沿用 client 設定的信箱"""
        client = MagicMock()
        client.default_request.return_value = SearchRequest(user_id="qa@example.com")

        request = QueryHelper(client).build_request(ORDER_QUERY, "123", "2024-01-01")

        assert request.user_id == "qa@example.com"
        client.default_request.assert_called_once_with()

    @pytest.mark.unit
    def test_search_delegates_to_client(self):
        client = _client()
        client.search_by_query.return_value = [{"id": "m1"}]

        result = QueryHelper(client).search(ORDER_QUERY, "123", "2024-01-01")

        assert result == [{"id": "m1"}]
        request = client.search_by_query.call_args.args[0]
        assert request.q == "subject:123 AND after:2024-01-01"

    @pytest.mark.unit
    def test_search_until_count_delegates_polling(self):
        """數量輪詢交給 client.count_by_query"""
        client = _client()
        client.count_by_query.return_value = 2

        count = QueryHelper(client).search_until_count(2, ORDER_QUERY, "123", "2024-01-01")

        assert count == 2
        expected, request = client.count_by_query.call_args.args
        assert expected == 2
        assert request.q == "subject:123 AND after:2024-01-01"

    @pytest.mark.unit
    def test_malformed_template_never_reaches_client(self):
        client = _client()
        with pytest.raises(MalformedTemplateError):
            QueryHelper(client).search_until_count(1, "subject:invoice")
        client.count_by_query.assert_not_called()

    @pytest.mark.unit
    def test_load_templates(self):
        templates = QueryHelper.load_templates("mail/queries.json")
        assert templates["byOrderIdAndDate"] == ORDER_QUERY

    @pytest.mark.unit
    def test_load_templates_absolute_path(self, tmp_path):
        path = tmp_path / "queries.json"
        path.write_text(json.dumps({"q": "from:%SENDER%"}), encoding="utf-8")
        assert QueryHelper.load_templates(str(path)) == {"q": "from:%SENDER%"}
        assert DATA_DIR.name == "test_data"
