from __future__ import annotations

import time
from typing import Any

import httpx

from roster.errors import CATEGORY_API, AppError


class ApiError(AppError):
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body_snippet: str | None = None,
        retryable: bool = False,
        details: dict | None = None,
        code: str | None = None,
    ):
        """
        Назначение:
            Исключение для ошибок HTTP/API уровня RecordsApiClient.
        Контракт:
            - code: строковый код (HTTP_*, NETWORK_ERROR, INVALID_JSON и т.п.).
            - status_code/body_snippet используются для диагностики.
        """
        super().__init__(
            category=CATEGORY_API,
            code=code or (f"HTTP_{status_code}" if status_code else "API_ERROR"),
            message=message,
            retryable=retryable,
            details=details or {},
        )
        self.status_code = status_code
        self.body_snippet = body_snippet


class RecordsApiClient:
    def __init__(
        self,
        baseUrl: str,
        timeoutSeconds: float = 20.0,
        tlsSkipVerify: bool = False,
        caFile: str | None = None,
        retries: int = 3,
        retryBackoffSeconds: float = 0.5,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Назначение:
            Read-only клиент API сотрудников/табелей с простой политикой ретраев.
        Контракт:
            - baseUrl обязателен.
            - retries/retryBackoffSeconds управляют повторными попытками.
        """
        verify: bool | str = True
        if tlsSkipVerify:
            verify = False
        elif caFile:
            verify = caFile

        self.baseUrl = baseUrl.rstrip("/")
        self.retries = retries
        self.retryBackoffSeconds = retryBackoffSeconds
        self.retry_attempts = 0

        self.client = httpx.Client(
            base_url=self.baseUrl,
            timeout=timeoutSeconds,
            verify=verify,
            transport=transport,
        )

    def getRetryAttempts(self) -> int:
        """Возвращает количество выполненных повторных попыток."""
        return self.retry_attempts

    def _should_retry(self, resp: httpx.Response) -> bool:
        """Решает, стоит ли повторить запрос (429 или 5xx)."""
        if resp.status_code == 429:
            return True
        if 500 <= resp.status_code <= 599:
            return True
        return False

    def _sleep_backoff(self, attempt: int) -> None:
        delay = self.retryBackoffSeconds * (2 ** attempt)
        if delay > 0:
            time.sleep(delay)

    def _request_with_retry(self, path: str, params: dict[str, Any]) -> httpx.Response:
        """GET с ретраями по 429/5xx и сетевым ошибкам, иначе ApiError."""
        attempt = 0
        while True:
            try:
                resp = self.client.get(path, params=params, headers={"accept": "application/json"})
            except (httpx.TimeoutException, httpx.TransportError) as exc:
                if attempt >= self.retries:
                    raise ApiError("Network error", status_code=None, retryable=False, code="NETWORK_ERROR") from exc
                self.retry_attempts += 1
                self._sleep_backoff(attempt)
                attempt += 1
                continue

            if resp.status_code == 200:
                return resp

            if self._should_retry(resp) and attempt < self.retries:
                self.retry_attempts += 1
                self._sleep_backoff(attempt)
                attempt += 1
                continue

            body_snippet = resp.text[:200] if resp.text else None
            raise ApiError(
                f"HTTP {resp.status_code}",
                status_code=resp.status_code,
                body_snippet=body_snippet,
                retryable=self._should_retry(resp),
                details={"body_snippet": body_snippet},
            )

    def getJson(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET JSON с ретраями, парсит ответ или бросает ApiError."""
        resp = self._request_with_retry(path, params or {})
        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(
                "Invalid JSON response",
                status_code=resp.status_code,
                retryable=False,
                code="INVALID_JSON",
            ) from exc

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "RecordsApiClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
