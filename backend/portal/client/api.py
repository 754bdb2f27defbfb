from __future__ import annotations

import logging
import os
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30.0


class ApiError(Exception):
    """Failed call, carrying the message the portal should show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if not isinstance(body, dict):
        return fallback
    message = body.get("detail") or body.get("message")
    if isinstance(message, list):
        message = message[0] if message else None
        if isinstance(message, dict):
            message = message.get("msg")
    return message if isinstance(message, str) and message else fallback


class CompanyApiClient:
    """Thin client over the ``/companies`` endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        token: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        token = token if token is not None else os.getenv("PORTAL_TOKEN")
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        if http is None:
            base_url = (base_url or os.getenv("PORTAL_API_URL") or DEFAULT_API_URL).rstrip("/")
            http = httpx.Client(base_url=base_url, timeout=timeout)
            self._owns_http = True
        else:
            self._owns_http = False
        self._http = http
        self._headers = headers

    def __enter__(self) -> "CompanyApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def _request(self, method: str, path: str, fallback: str, **kwargs) -> Any:
        try:
            response = self._http.request(method, path, headers=self._headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("portal_request_failed method=%s path=%s error=%s", method, path, exc)
            raise ApiError(fallback) from exc
        if response.is_error:
            raise ApiError(_error_message(response, fallback), response.status_code)
        return response.json()

    def create(self, data: dict, internal: bool = False) -> dict:
        params = {"internal": "true"} if internal else None
        return self._request(
            "POST", "/companies", "Erro ao cadastrar empresa", json=data, params=params
        )

    def list(self) -> list[dict]:
        return self._request("GET", "/companies", "Erro ao carregar empresas")

    def get(self, company_id: str) -> dict:
        return self._request("GET", f"/companies/{company_id}", "Erro ao carregar empresa")

    def approve(self, company_id: str) -> dict:
        return self._request("PATCH", f"/companies/{company_id}/approve", "Erro ao aprovar empresa")

    def reject(self, company_id: str, motivo: str) -> dict:
        return self._request(
            "PATCH",
            f"/companies/{company_id}/reject",
            "Erro ao reprovar empresa",
            json={"motivo": motivo},
        )

    def update(self, company_id: str, data: dict) -> dict:
        return self._request(
            "PATCH", f"/companies/{company_id}", "Erro ao atualizar empresa", json=data
        )
