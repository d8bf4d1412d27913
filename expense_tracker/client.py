"""HTTP client for talking with the expense tracker API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

DEFAULT_BASE_URL = "http://127.0.0.1:3000"


class ClientError(RuntimeError):
    """Raised when the API answers with a non-success status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class TransactionClient:
    """Thin wrapper over the ``/transactions`` endpoints."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[Any] = None,
        timeout: float = 5,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._session = session if session is not None else requests.Session()
        self._timeout = timeout

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        response = self._session.request(
            method,
            f"{self.base_url}{path}",
            json=payload,
            timeout=self._timeout,
        )
        if response.status_code >= 400:
            try:
                message = response.json().get("error", response.text)
            except ValueError:
                message = response.text
            raise ClientError(response.status_code, message)
        return response.json()

    def list_transactions(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/transactions")["transactions"]

    def get(self, transaction_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/transactions/{transaction_id}")

    def create(
        self,
        type: str,
        category: str,
        amount: float,
        date: str,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {"type": type, "category": category, "amount": amount, "date": date, "description": description}
        return self._request("POST", "/transactions", payload)

    def update(
        self,
        transaction_id: int,
        type: str,
        category: str,
        amount: float,
        date: str,
        description: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {"type": type, "category": category, "amount": amount, "date": date, "description": description}
        return self._request("PUT", f"/transactions/{transaction_id}", payload)

    def delete(self, transaction_id: int) -> None:
        self._request("DELETE", f"/transactions/{transaction_id}")

    def summary(self) -> Dict[str, float]:
        return self._request("GET", "/transactions/summary")


__all__ = ["ClientError", "DEFAULT_BASE_URL", "TransactionClient"]
