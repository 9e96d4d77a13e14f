"""Tests for harness.api.executor."""

import logging

import pytest

from fakes import FakeResponse
from harness.api.auth_headers import AuthHeaders
from harness.api.executor import ApiExecutor, build_query_string
from harness.api.models import RequestOptions, SampleApiRequest
from harness.data_bag import DataBagKeys

URL = "https://api.test/services/v1/users"


@pytest.fixture
def executor(data_bag, fake_request_context):
    return ApiExecutor(data_bag, fake_request_context)


class TestBuildQueryString:
    def test_single_record(self):
        assert build_query_string([{"a": "1", "b": "2"}]) == "a=1&b=2"

    def test_records_in_order(self):
        assert build_query_string([{"page": "1"}, {"limit": "10", "sort": "asc"}]) == "page=1&limit=10&sort=asc"

    def test_no_url_encoding(self):
        assert build_query_string([{"q": "a b&c", "name": "é"}]) == "q=a b&c&name=é"

    def test_empty(self):
        assert build_query_string([]) == ""
        assert build_query_string([{}]) == ""


class TestStaging:
    def test_save_query_params_overwrites(self, executor, data_bag):
        executor.save_query_params([{"a": "1"}])
        executor.save_query_params([{"b": "2"}])
        assert data_bag.get(DataBagKeys.QUERY_PARAMETERS) == "b=2"

    def test_save_additional_headers_stores_records_unmodified(self, executor, data_bag):
        records = [{"X-One": "1"}, {"X-Two": "2"}]
        executor.save_additional_headers(records)
        assert data_bag.get(DataBagKeys.ADDITIONAL_HEADERS) is records

    def test_url_with_query(self, executor):
        executor.save_query_params([{"page": "1", "limit": "10"}])
        assert executor.url_with_query(URL) == URL + "?page=1&limit=10"
        assert executor.url_with_query(URL + "?x=1") == URL + "?x=1&page=1&limit=10"

    def test_url_with_query_without_params(self, executor):
        assert executor.url_with_query(URL) == URL


class TestHeaders:
    def test_no_staged_headers(self, executor):
        assert executor.get_headers_data() == {}

    def test_auth_headers_only(self, executor, data_bag):
        data_bag.save(DataBagKeys.AUTH_HEADERS, AuthHeaders(token="Bearer abc"))
        assert executor.get_headers_data() == {"Token": "Bearer abc"}

    def test_auth_headers_as_dict_are_copied(self, executor, data_bag):
        auth = {"Token": "Bearer abc"}
        data_bag.save(DataBagKeys.AUTH_HEADERS, auth)
        headers = executor.get_headers_data()
        headers["X-Extra"] = "1"
        assert auth == {"Token": "Bearer abc"}

    def test_later_records_win(self, executor, data_bag):
        data_bag.save(DataBagKeys.AUTH_HEADERS, AuthHeaders(token="Bearer abc"))
        executor.save_additional_headers([
            {"X-Client": "qa", "X-Trace": "1"},
            {"X-Trace": "2", "Token": "Bearer override"},
        ])
        assert executor.get_headers_data() == {
            "Token": "Bearer override",
            "X-Client": "qa",
            "X-Trace": "2",
        }

    def test_repeated_staging_gives_same_headers(self, executor, data_bag):
        records = [{"X-Client": "qa"}]
        executor.save_additional_headers(records)
        first = executor.get_headers_data()
        executor.save_additional_headers(records)
        assert executor.get_headers_data() == first


class TestCalls:
    def test_get_sends_merged_headers_and_timeout(self, executor, data_bag, fake_request_context):
        data_bag.save(DataBagKeys.AUTH_HEADERS, AuthHeaders(token="Bearer abc"))
        executor.save_additional_headers([{"X-Client": "qa"}])

        response = executor.get(URL)

        assert response is fake_request_context.response
        call = fake_request_context.last_call
        assert call["method"] == "GET"
        assert call["url"] == URL
        assert call["headers"] == {"Token": "Bearer abc", "X-Client": "qa"}
        assert call["timeout"] == 150000
        assert "data" not in call

    def test_get_and_post_merge_headers_identically(self, executor, data_bag, fake_request_context):
        data_bag.save(DataBagKeys.AUTH_HEADERS, AuthHeaders(token="Bearer abc"))
        executor.save_additional_headers([{"X-Client": "qa"}])

        executor.get(URL)
        executor.post(URL)

        get_call, post_call = fake_request_context.calls
        assert get_call["headers"] == post_call["headers"]

    def test_post_sends_staged_body(self, executor, data_bag, fake_request_context):
        data_bag.save(DataBagKeys.REQUEST_BODY, {"name": "John"})
        executor.post(URL)
        assert fake_request_context.last_call["data"] == {"name": "John"}

    def test_post_serializes_models_by_alias(self, executor, data_bag, fake_request_context):
        data_bag.save(DataBagKeys.REQUEST_BODY, SampleApiRequest(account_number=42))
        executor.post(URL)
        body = fake_request_context.last_call["data"]
        assert body["AccountNumber"] == 42
        assert body["CompanyCode"] == "00555"

    def test_post_sends_default_request_body(self, executor, data_bag, fake_request_context):
        data_bag.save(DataBagKeys.REQUEST_BODY, SampleApiRequest())
        executor.post(URL)
        assert sorted(fake_request_context.last_call["data"]) == [
            "CompanyCode",
            "CropYear",
            "MarketingBrandList",
            "PackageSizeList",
            "ProductLineList",
            "SeedSizeList",
            "TechnologyList",
            "TreatmentList",
        ]

    def test_post_without_staged_body(self, executor, fake_request_context):
        executor.post(URL)
        assert fake_request_context.last_call["data"] is None

    def test_non_2xx_is_returned(self, executor, fake_request_context):
        fake_request_context.response = FakeResponse(status=500, body="oops")
        assert executor.get(URL).status == 500

    def test_transport_error_propagates(self, executor, fake_request_context):
        fake_request_context.error = TimeoutError("Timeout 150000ms exceeded")
        with pytest.raises(TimeoutError):
            executor.post(URL)
        assert len(fake_request_context.calls) == 1

    def test_logs_url(self, executor, caplog):
        with caplog.at_level(logging.INFO, logger="harness.api.executor"):
            executor.get(URL)
        assert f"about to call {URL}" in caplog.text


class TestRequestOptions:
    def test_options_replace_staged_headers_and_body(self, executor, data_bag, fake_request_context):
        data_bag.save(DataBagKeys.AUTH_HEADERS, AuthHeaders(token="Bearer staged"))
        executor.save_additional_headers([{"X-Staged": "1"}])
        data_bag.save(DataBagKeys.REQUEST_BODY, {"staged": True})

        options = RequestOptions().with_header("X-Call", "1").with_body({"call": True})
        executor.post(URL, options)

        call = fake_request_context.last_call
        assert call["headers"] == {"Token": "Bearer staged", "X-Call": "1"}
        assert call["data"] == {"call": True}

    def test_options_auth_wins_over_staged_auth(self, executor, data_bag, fake_request_context):
        data_bag.save(DataBagKeys.AUTH_HEADERS, AuthHeaders(token="Bearer staged"))
        executor.get(URL, RequestOptions().with_auth_token("Bearer call"))
        assert fake_request_context.last_call["headers"] == {"Token": "Bearer call"}

    def test_options_query_params_are_appended(self, executor, fake_request_context):
        options = RequestOptions().with_query_param("page", "2").with_query_param("limit", "5")
        executor.get(URL, options)
        assert fake_request_context.last_call["url"] == URL + "?page=2&limit=5"


class TestMethodRegistry:
    def test_execute_dispatches_case_insensitively(self, executor, fake_request_context):
        executor.execute("GET", URL)
        executor.execute("post", URL)
        assert [c["method"] for c in fake_request_context.calls] == ["GET", "POST"]

    def test_unknown_method(self, executor):
        with pytest.raises(ValueError, match="Unsupported HTTP method 'PATCH'"):
            executor.execute("PATCH", URL)

    def test_register_custom_method(self, executor):
        seen = []
        executor.register_method("DELETE", lambda url, options: seen.append(url) or "deleted")
        assert executor.execute("delete", URL) == "deleted"
        assert seen == [URL]
