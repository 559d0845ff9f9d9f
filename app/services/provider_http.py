"""외부 제공자 HTTP 호출 공용 유틸리티."""

from __future__ import annotations

import asyncio
from typing import Any

import requests

from app.core.timeout_policy import to_requests_timeout


def status_code_of(exc: BaseException) -> int | None:
    """HTTPError에서 상태 코드를 꺼냅니다. 응답이 없으면 None입니다."""
    if isinstance(exc, requests.HTTPError) and exc.response is not None:
        return exc.response.status_code
    return None


async def get_json(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout_seconds: int,
) -> Any:
    """GET 요청을 한 번 보내고 JSON 본문을 반환합니다.

    재시도하지 않습니다. 실패 처리는 호출하는 서비스의 책임입니다.

    Raises:
        requests.RequestException: 네트워크 오류, 타임아웃, 2xx가 아닌 응답.
        ValueError: 본문이 JSON이 아닌 경우.
    """
    request_timeout = to_requests_timeout(timeout_seconds)

    def _send() -> requests.Response:
        return requests.get(url, params=params, headers=headers, timeout=request_timeout)

    response = await asyncio.to_thread(_send)
    response.raise_for_status()
    return response.json()
