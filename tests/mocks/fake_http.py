"""`requests.get` 대체용 가짜 응답."""

from __future__ import annotations

from typing import Any

import requests


class FakeResponse:
    """`raise_for_status`와 `json`만 흉내 내는 최소 응답 객체."""

    def __init__(self, payload: Any = None, status_code: int = 200, *, invalid_json: bool = False) -> None:
        self._payload = payload
        self.status_code = status_code
        self._invalid_json = invalid_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self) -> Any:
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class RecordingGet:
    """호출 인자를 기록하며 순서대로 응답(또는 예외)을 돌려주는 `requests.get` 대체."""

    def __init__(self, *responses: FakeResponse | Exception) -> None:
        self._responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def __call__(self, url: str, params=None, headers=None, timeout=None) -> FakeResponse:
        self.calls.append({"url": url, "params": params or {}, "headers": headers or {}, "timeout": timeout})
        response = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(response, Exception):
            raise response
        return response
