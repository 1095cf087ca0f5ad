"""Shared HTTP transport utilities for the task REST adapter.

This module provides a thin wrapper around ``requests.Session`` so adapter
implementations share timeout policy, retry behavior, and API-key header
construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``taskboard.adapters.api_errors.ApiTimeoutError`` for typed transport
      failures.

Call context:
    - Constructed by ``taskboard.adapters.tasks_rest.TasksRestDataSource``.
    - Used only inside adapter methods; the presenter talks to ports.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from taskboard.adapters.api_errors import ApiError, ApiTimeoutError


@dataclass
class HttpConfig:
    """Timeout and retry configuration for adapter HTTP calls.

    Attributes:
        request_timeout_s: Default timeout in seconds for JSON API calls.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: int = 10
    retries: int = 2


class RetryingSession:
    """Shared requests wrapper with API-key headers and retry loops.

    This class is transport-only. Callers provide endpoint URLs and decide how
    to map non-2xx responses into domain errors.
    """

    def __init__(self, api_key: Optional[str], cfg: HttpConfig) -> None:
        """Create a retry-enabled session.

        Args:
            api_key: API key value to place in ``X-API-Key`` headers, or ``None``.
            cfg: Shared timeout and retry settings.
        """
        self.session = requests.Session()
        self.api_key = api_key
        self.cfg = cfg

    def _headers(
        self, accept: str = "application/json", json_body: bool = False
    ) -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Issue ``method`` with retries on timeout/connectivity failures.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
            ApiError: For any other ``requests`` failure.
        """
        context = f"{method.upper()} {url}"
        last_err: ApiError | None = None
        attempts = self.cfg.retries + 1
        for _ in range(attempts):
            try:
                return self.session.request(method, url, **kwargs)
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
            except req_exc.RequestException as exc:
                raise ApiError(str(exc), context=context) from exc
        raise last_err

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a GET request with retries."""
        return self._send(
            "get",
            url,
            params=params,
            headers=self._headers(),
            timeout=timeout or self.cfg.request_timeout_s,
        )

    def post(
        self,
        url: str,
        *,
        json_body: Optional[Dict[str, Any]] = None,
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Send a JSON POST request with retries.

        Side Effects:
            Serializes ``json_body`` with ``json.dumps`` before sending.
        """
        data = None if json_body is None else json.dumps(json_body)
        return self._send(
            "post",
            url,
            data=data,
            headers=self._headers(json_body=json_body is not None),
            timeout=timeout or self.cfg.request_timeout_s,
        )

    def delete(self, url: str, *, timeout: Optional[int] = None) -> requests.Response:
        """Send a DELETE request with retries."""
        return self._send(
            "delete",
            url,
            headers=self._headers(),
            timeout=timeout or self.cfg.request_timeout_s,
        )


__all__ = ["HttpConfig", "RetryingSession"]
