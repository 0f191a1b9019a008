"""Shared HTTP transport for the sales API adapters.

Wraps ``requests.Session`` so the department and seller adapters share one
timeout policy, one retry loop and one way of building headers. Mapping
non-2xx responses to typed errors is left to :class:`RestAdapterBase`.

Call context:
    Constructed by ``DepartmentRestAdapter`` and ``SellerRestAdapter``; use
    cases never see it directly.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from .api_errors import ApiClientError, ApiError, ApiServerError, ApiTimeoutError, ErrorBody


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds for each request.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: int = 10
    retries: int = 2


class RetryingSession:
    """Requests wrapper with API-key headers and a retry loop.

    Only timeouts and connection errors are retried; any HTTP response,
    including 5xx, is returned to the caller as-is.
    """

    def __init__(self, api_key: Optional[str], cfg: HttpConfig) -> None:
        self.session = requests.Session()
        self.api_key = api_key
        self.cfg = cfg

    def _headers(self, json_body: bool = False) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send one request, retrying on timeout/connectivity failures.

        Raises:
            ApiTimeoutError: If every attempt failed to reach the server.
            ApiError: For other ``requests`` failures (invalid URL, ...).
        """
        context = f"{method} {url}"
        data = None if json_body is None else json.dumps(json_body)
        last_err: Optional[ApiError] = None
        for _ in range(self.cfg.retries + 1):
            try:
                return self.session.request(
                    method,
                    url,
                    params=params,
                    data=data,
                    headers=self._headers(json_body=json_body is not None),
                    timeout=timeout or self.cfg.request_timeout_s,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc
        assert last_err is not None
        raise last_err

    def get(self, url: str, *, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("GET", url, params=params)

    def post(self, url: str, *, json_body: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("POST", url, json_body=json_body)

    def put(self, url: str, *, json_body: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.request("PUT", url, json_body=json_body)

    def delete(self, url: str) -> requests.Response:
        return self.request("DELETE", url)


class RestAdapterBase:
    """URL building and response checking shared by the REST adapters."""

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ValueError(f"{type(self).__name__} requires a base URL")
        self.base_url = base_url.strip().rstrip("/")
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(api_key or None, self.cfg)

    def _make_url(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"{self.base_url}{path}"

    @staticmethod
    def _ensure_ok(resp: Any, ctx: str) -> None:
        status = int(getattr(resp, "status_code", 0))
        if 200 <= status < 300:
            return
        body = ErrorBody.from_response(resp)
        if 400 <= status < 500:
            error_cls = ApiClientError
        elif status >= 500:
            error_cls = ApiServerError
        else:
            error_cls = ApiError
        raise error_cls(
            body.message(ctx, status),
            status=status,
            code=body.code,
            hint=body.hint,
            payload=body.raw,
            context=ctx,
        )

    @staticmethod
    def _json(resp: Any, ctx: str) -> Any:
        if getattr(resp, "status_code", 0) == 204:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(f"{ctx}: invalid JSON response", context=ctx) from exc


__all__ = ["HttpConfig", "RestAdapterBase", "RetryingSession"]
