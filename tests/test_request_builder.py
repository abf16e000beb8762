"""
Request Builder Tests
---------------------
Tests for turning a logical Request into an authenticated httpx.Request.

Tests cover:
- URL validation (missing URL, pre-existing query)
- Query param encoding
- JSON body encoding with explicit Content-Length
- Identity headers
"""

import json
from datetime import datetime, timezone

import httpx
import pytest
from pydantic_core import PydanticSerializationError

from parse_sdk import ACL, Client, Object, Permissions, Request
from parse_sdk.api.client import (
    APPLICATION_ID_HEADER, REST_API_KEY_HEADER, encode_body, make_query_params,
)
from parse_sdk.core.errors import (
    ErrorCategory, InternalError, NoURLError, URLIncludesQueryError,
)


@pytest.fixture
def client(credentials):
    def _fail(request):
        raise AssertionError("request builder must not send anything")

    http_client = httpx.Client(transport=httpx.MockTransport(_fail))
    yield Client(credentials, http_client=http_client)
    http_client.close()


class TestURLValidation:
    """Caller-contract checks on the target URL."""

    def test_missing_url_raises(self, client):
        """A request without a URL is rejected."""
        with pytest.raises(NoURLError) as exc_info:
            Request(method="GET").to_http_request(client)

        assert exc_info.value.category == ErrorCategory.CALLER_CONTRACT
        assert isinstance(exc_info.value, ValueError)

    def test_empty_url_raises(self, client):
        """An empty string counts as no URL."""
        with pytest.raises(NoURLError):
            Request(method="GET", url="").to_http_request(client)

    def test_empty_httpx_url_raises(self, client):
        with pytest.raises(NoURLError):
            Request(method="GET", url=httpx.URL("")).to_http_request(client)

    def test_url_with_query_raises_internal_error(self, client):
        """Query must arrive via params, never in the URL."""
        request = Request(method="GET", url="https://api.parse.com/1/classes/Foo?limit=1")

        with pytest.raises(InternalError) as exc_info:
            request.to_http_request(client)

        assert isinstance(exc_info.value.actual, URLIncludesQueryError)
        assert exc_info.value.request is None
        assert "URL cannot include query" in str(exc_info.value)
        assert "request for URL https://api.parse.com/1/classes/Foo?limit=1" in str(exc_info.value)

    def test_url_with_query_and_params_still_raises(self, client):
        """Params never merge into an existing query."""
        request = Request(
            method="GET",
            url="https://api.parse.com/1/classes/Foo?a=b",
            params=[("limit", 1)],
        )

        with pytest.raises(InternalError):
            request.to_http_request(client)


class TestQueryParams:
    """Encoding of the params list."""

    def test_params_encoded_into_query(self, client):
        """The query string matches the encoding of the params."""
        params = [("limit", 10), ("order", "-createdAt"), ("where", '{"score":1}')]
        request = Request(
            method="GET",
            url="https://api.parse.com/1/classes/GameScore",
            params=params,
        )

        http_request = request.to_http_request(client)

        assert http_request.url.params == httpx.QueryParams(params)
        assert http_request.url.params["where"] == '{"score":1}'
        assert http_request.url.path == "/1/classes/GameScore"

    def test_booleans_and_none(self, client):
        """Booleans render as true/false and None as an empty value."""
        query = make_query_params([("count", True), ("skip", None), ("keys", False)])

        assert query["count"] == "true"
        assert query["skip"] == ""
        assert query["keys"] == "false"

    def test_repeated_keys_kept(self, client):
        """Repeated keys are all sent."""
        request = Request(
            method="GET",
            url="https://api.parse.com/1/classes/Foo",
            params=[("include", "a"), ("include", "b")],
        )

        http_request = request.to_http_request(client)

        assert http_request.url.params.get_list("include") == ["a", "b"]

    def test_unsupported_param_value(self, client):
        """Non-scalar values cannot be encoded."""
        request = Request(
            method="GET",
            url="https://api.parse.com/1/classes/Foo",
            params=[("where", {"score": 1})],
        )

        with pytest.raises(InternalError) as exc_info:
            request.to_http_request(client)

        assert isinstance(exc_info.value.actual, TypeError)

    def test_no_params_leaves_url_untouched(self, client):
        http_request = Request(method="GET", url="https://api.parse.com/1/users/").to_http_request(client)

        assert str(http_request.url) == "https://api.parse.com/1/users/"
        assert http_request.url.query == b""

    def test_request_is_not_mutated(self, client):
        """Building twice yields the same URL."""
        request = Request(
            method="GET",
            url="https://api.parse.com/1/classes/Foo",
            params=[("limit", 5)],
        )

        first = request.to_http_request(client)
        second = request.to_http_request(client)

        assert first.url == second.url
        assert request.url == "https://api.parse.com/1/classes/Foo"


class TestHeaders:
    """Identity headers sent on every request."""

    def test_identity_headers(self, client, credentials):
        http_request = Request(method="GET", url="https://api.parse.com/1/users/").to_http_request(client)

        assert http_request.headers[APPLICATION_ID_HEADER] == credentials.application_id
        assert http_request.headers[REST_API_KEY_HEADER] == credentials.rest_api_key

    def test_secret_keys_not_sent(self, client, credentials):
        """Master and JavaScript keys never go out as headers."""
        http_request = Request(
            method="POST",
            url="https://api.parse.com/1/classes/Foo",
            body={"a": 1},
        ).to_http_request(client)

        header_values = list(http_request.headers.values())
        assert credentials.master_key not in header_values
        assert credentials.javascript_key not in header_values
        identity = [k for k in http_request.headers if k.lower().startswith("x-parse-")]
        assert sorted(identity) == sorted(
            [APPLICATION_ID_HEADER.lower(), REST_API_KEY_HEADER.lower()]
        )


class TestBody:
    """JSON body encoding."""

    def test_body_json_with_content_length(self, client):
        http_request = Request(
            method="POST",
            url="https://api.parse.com/1/classes/GameScore",
            body={"score": 1337, "playerName": "Sean Plott"},
        ).to_http_request(client)

        content = http_request.read()
        assert json.loads(content) == {"score": 1337, "playerName": "Sean Plott"}
        assert http_request.headers["Content-Length"] == str(len(content))
        assert http_request.headers["Content-Type"] == "application/json"
        assert "Transfer-Encoding" not in http_request.headers

    def test_no_body_no_content_type(self, client):
        http_request = Request(method="DELETE", url="https://api.parse.com/1/classes/Foo/x").to_http_request(client)

        assert http_request.read() == b""
        assert "Content-Type" not in http_request.headers

    def test_unencodable_body_carries_partial_request(self, client):
        """Encoding failure keeps the body-less wire request for diagnostics."""
        request = Request(
            method="POST",
            url="https://api.parse.com/1/classes/Foo",
            body={"when": object()},
        )

        with pytest.raises(InternalError) as exc_info:
            request.to_http_request(client)

        err = exc_info.value
        assert isinstance(err.actual, PydanticSerializationError)
        assert err.request is not None
        assert err.request.method == "POST"
        assert str(err).startswith("POST request for URL https://api.parse.com/1/classes/Foo")

    def test_model_body_omits_absent_fields(self):
        """Models are dumped by alias without None fields."""
        created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        payload = json.loads(encode_body(Object(id="abc", created_at=created)))

        assert payload["objectId"] == "abc"
        assert "updatedAt" not in payload
        assert payload["createdAt"].startswith("2024-01-02T03:04:05")

    def test_nested_acl_body(self):
        """Models nested inside plain containers are dumped too."""
        body = {"score": 1, "ACL": ACL({"*": Permissions(read=True)})}

        assert json.loads(encode_body(body)) == {
            "score": 1,
            "ACL": {"*": {"read": True, "write": False}},
        }

    def test_datetime_body_value(self):
        when = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

        payload = json.loads(encode_body({"when": when}))

        assert payload["when"].startswith("2024-01-02T03:04:05")
