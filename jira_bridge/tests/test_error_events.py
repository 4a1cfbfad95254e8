"""
Tests for app/error_events.py Sentry event decoration.
"""
import sys

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from jira_bridge.app.error_events import HttpErrorEventDecorator


def build_event():
    return {"extra": {}, "tags": {}}


def build_hint(error):
    return {"original_exception": error}


def build_http_error(method, url, status, body=b"", response_headers=None, **request_kwargs):
    """A requests.HTTPError as raised by raise_for_status(), without any network."""
    request = requests.Request(method, url, **request_kwargs).prepare()
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.encoding = "utf-8"
    response.headers = CaseInsensitiveDict(response_headers or {})
    response.url = request.url
    response.request = request
    return requests.HTTPError(f"{status} Error", response=response)


class TestGet403:
    @pytest.fixture
    def hint(self):
        error = build_http_error("GET", "https://www.example.com/foo/bar", 403,
                                 response_headers={"X-Request-Id": "abcdef"})
        return build_hint(error)

    def test_adds_response_data(self, hint):
        event = HttpErrorEventDecorator.decorate(build_event(), hint)
        assert event["extra"]["response"] == {"status": 403, "headers": {"x-request-id": "abcdef"}}

    def test_adds_request_data(self, hint):
        event = HttpErrorEventDecorator.decorate(build_event(), hint)
        assert event["extra"]["request"] == {
            "method": "GET",
            "path": "/foo/bar",
            "host": "www.example.com",
            "headers": {},
        }

    def test_uses_path_and_status_for_grouping(self, hint):
        event = HttpErrorEventDecorator.decorate(build_event(), hint)
        assert event["fingerprint"] == ["{{ default }}", 403, "GET /foo/bar"]

    def test_keeps_existing_event_data(self, hint):
        event = {"extra": {"job": "sync"}, "tags": {"repo": "test"}}
        decorated = HttpErrorEventDecorator.decorate(event, hint)
        assert decorated["extra"]["job"] == "sync"
        assert decorated["tags"] == {"repo": "test"}


class TestQueryString:
    def test_excludes_query_string_from_grouping(self):
        error = build_http_error("GET", "https://www.example.com/foo/bar", 403, params={"hi": "hello"})
        event = HttpErrorEventDecorator.decorate(build_event(), build_hint(error))

        assert event["fingerprint"] == ["{{ default }}", 403, "GET /foo/bar"]
        assert event["extra"]["request"]["path"] == "/foo/bar?hi=hello"


class TestPostBodies:
    def test_adds_truncated_response_body(self):
        body = ("This is the really long body. " * 20).encode("utf-8")
        error = build_http_error("POST", "https://www.example.com/foo/bar", 401, body=body, json={"hello": "hi"})
        event = HttpErrorEventDecorator.decorate(build_event(), build_hint(error))

        assert event["extra"]["response"]["body"].startswith("This is the really long body")
        assert len(event["extra"]["response"]["body"]) == 255

    def test_adds_parsed_json_request_body(self):
        error = build_http_error("POST", "https://www.example.com/foo/bar", 401, json={"hello": "hi"})
        event = HttpErrorEventDecorator.decorate(build_event(), build_hint(error))

        assert event["extra"]["request"]["body"] == {"hello": "hi"}

    def test_adds_raw_form_body(self):
        error = build_http_error("POST", "https://www.example.com/foo/bar", 401, data="hi=hello")
        event = HttpErrorEventDecorator.decorate(build_event(), build_hint(error))

        assert event["extra"]["request"]["body"] == "hi=hello"

    def test_returns_raw_body_when_json_parsing_fails(self):
        error = build_http_error("POST", "https://www.example.com/foo/bar", 400, data="invalid-json",
                                 headers={"Content-Type": "application/json"})
        event = HttpErrorEventDecorator.decorate(build_event(), build_hint(error))

        assert event["extra"]["request"]["body"] == "invalid-json"

    def test_does_not_parse_other_content_types(self):
        error = build_http_error("POST", "https://www.example.com/foo/bar", 400, data='{"a": 1}',
                                 headers={"Content-Type": "text/plain"})
        event = HttpErrorEventDecorator.decorate(build_event(), build_hint(error))

        assert event["extra"]["request"]["body"] == '{"a": 1}'

    def test_json_response_body_is_text(self):
        error = build_http_error("GET", "https://www.example.com/test", 400, body=b'{"message": "error message"}')
        event = HttpErrorEventDecorator.decorate(build_event(), build_hint(error))

        assert event["extra"]["response"]["body"] == '{"message": "error message"}'


class TestNonHttpErrors:
    def test_generic_error_does_nothing(self):
        event = build_event()
        decorated = HttpErrorEventDecorator.decorate(event, build_hint(RuntimeError("boom")))

        assert decorated is event
        assert "response" not in decorated["extra"]
        assert "fingerprint" not in decorated

    def test_error_without_response(self):
        decorated = HttpErrorEventDecorator.decorate(build_event(), build_hint(requests.ConnectionError("Network error")))
        assert decorated["extra"] == {}

    def test_response_without_request(self):
        response = requests.Response()
        response.status_code = 500
        error = requests.HTTPError("API error", response=response)

        decorated = HttpErrorEventDecorator.decorate(build_event(), build_hint(error))
        assert decorated["extra"] == {}

    def test_missing_hint(self):
        event = build_event()
        assert HttpErrorEventDecorator.decorate(event, None) is event


class TestSentryHint:
    def test_reads_exception_from_exc_info(self):
        error = build_http_error("DELETE", "https://www.example.com/items/1", 404)
        try:
            raise error
        except requests.HTTPError:
            hint = {"exc_info": sys.exc_info()}

        event = HttpErrorEventDecorator.decorate(build_event(), hint)
        assert event["fingerprint"] == ["{{ default }}", 404, "DELETE /items/1"]
