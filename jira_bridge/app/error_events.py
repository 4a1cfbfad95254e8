"""
Enrich Sentry events raised by failed ``requests`` calls.

Used as Sentry's ``before_send`` hook: the event gets the status, headers and
(truncated) body of the response, the request that caused it, and a
fingerprint that groups errors by status and endpoint instead of by stack
trace.
"""
import json
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

import requests

from .. import config


def _lower_headers(headers) -> Dict[str, str]:
    return {str(k).lower(): v for k, v in (headers or {}).items()}


class HttpErrorEventDecorator:
    def __init__(self, event: Dict[str, Any], hint: Optional[Dict[str, Any]]):
        self.event = event
        self.hint = hint or {}

    @classmethod
    def decorate(cls, event: Dict[str, Any], hint: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return cls(event, hint).decorated()

    @property
    def error(self) -> Optional[BaseException]:
        if self.hint.get("original_exception") is not None:
            return self.hint["original_exception"]
        exc_info = self.hint.get("exc_info")
        return exc_info[1] if exc_info else None

    @property
    def response(self) -> Optional[requests.Response]:
        return getattr(self.error, "response", None)

    @property
    def request(self) -> Optional[requests.PreparedRequest]:
        return getattr(self.response, "request", None)

    def is_valid(self) -> bool:
        return (
            isinstance(self.error, requests.RequestException)
            and self.response is not None
            and self.request is not None
        )

    def decorated(self) -> Dict[str, Any]:
        if not self.is_valid():
            return self.event
        extra = dict(self.event.get("extra") or {})
        extra["response"] = self.response_metadata()
        extra["request"] = self.request_metadata()
        return {**self.event, "extra": extra, "fingerprint": self.fingerprint()}

    def _url(self):
        return urlsplit(self.request.url or "")

    def path(self) -> str:
        url = self._url()
        return f"{url.path}?{url.query}" if url.query else url.path

    def fingerprint(self) -> list:
        return ["{{ default }}", self.response.status_code, f"{self.request.method} {self._url().path}"]

    def response_metadata(self) -> Dict[str, Any]:
        metadata = {
            "status": self.response.status_code,
            "headers": _lower_headers(self.response.headers),
        }
        body = self.response.text if self.response.content else ""
        if body:
            metadata["body"] = body[:config.RESPONSE_BODY_LIMIT]
        return metadata

    def request_metadata(self) -> Dict[str, Any]:
        headers = _lower_headers(self.request.headers)
        metadata = {
            "method": self.request.method,
            "path": self.path(),
            "host": headers.get("host") or self._url().netloc,
            "headers": headers,
        }
        body = self.request_body(headers)
        if body:
            metadata["body"] = body
        return metadata

    def request_body(self, headers: Dict[str, str]) -> Any:
        body = self.request.body
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        if not body:
            return body
        if not headers.get("content-type", "").startswith("application/json"):
            return body
        try:
            return json.loads(body)
        except ValueError:
            return body
