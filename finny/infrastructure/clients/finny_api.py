"""Finny REST API client used by the budget sync layer"""

import httpx
from typing import Any, Dict, List
from finny.domain.models import MoneyEntry
from finny.domain.exceptions import FinnyAPIError
from finny.config import settings


def _income_from_json(data: Dict[str, Any]) -> MoneyEntry:
    return MoneyEntry(
        id=data["id"],
        amount=float(data["amount"]),
        frequency=data["frequency"],
        label=data["source"],
        description=data.get("description"),
    )


def _expense_from_json(data: Dict[str, Any]) -> MoneyEntry:
    return MoneyEntry(
        id=data["id"],
        amount=float(data["amount"]),
        frequency=data["frequency"],
        label=data["category"],
        description=data.get("description"),
    )


def _parse(parser, data: Any, kind: str) -> MoneyEntry:
    try:
        return parser(data)
    except (KeyError, TypeError, ValueError) as e:
        raise FinnyAPIError(f"Invalid {kind} data: {e}") from e


class FinnyAPIClient:
    """
    Async client for the Finny API.

    Keeps one httpx.AsyncClient so the session cookie set by `login`
    is sent with every later call. Use as an async context manager or
    call `aclose()`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.api_base_url
        self.timeout = timeout or settings.http_timeout_seconds
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport)

    async def __aenter__(self) -> "FinnyAPIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            FinnyAPIError: On timeout, network failure, error status or invalid JSON
        """
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise FinnyAPIError(f"{method} {path} timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise FinnyAPIError(
                f"{method} {path} failed: {e.response.status_code}", status_code=e.response.status_code
            ) from e
        except httpx.RequestError as e:
            raise FinnyAPIError(f"{method} {path} failed: {e}") from e
        except ValueError as e:
            raise FinnyAPIError(f"Invalid JSON from {method} {path}: {e}") from e

    # Session

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request("POST", "/auth/login", json={"email": email, "password": password})

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout")

    # User

    async def get_user(self) -> Dict[str, Any]:
        return await self._request("GET", "/user")

    async def update_income_settings(self, income: float, employment_mode: str, income_frequency: str) -> Dict[str, Any]:
        return await self._request(
            "PUT",
            "/user/income",
            json={"income": income, "employment_mode": employment_mode, "income_frequency": income_frequency},
        )

    async def get_experience(self) -> Dict[str, Any]:
        return await self._request("GET", "/user/experience")

    async def update_experience(self, level: int, experience: int) -> Dict[str, Any]:
        return await self._request("PUT", "/user/experience", json={"level": level, "experience": experience})

    # Income

    async def list_incomes(self) -> List[MoneyEntry]:
        return [_parse(_income_from_json, item, "income") for item in await self._request("GET", "/income")]

    async def create_income(self, entry: MoneyEntry, on: str) -> MoneyEntry:
        """Save an income; `on` is the ISO date the income was received"""
        data = await self._request(
            "POST",
            "/income",
            json={
                "source": entry.label,
                "amount": entry.amount,
                "frequency": entry.frequency,
                "description": entry.description,
                "date": on,
            },
        )
        return _parse(_income_from_json, data, "income")

    async def delete_income(self, income_id: str) -> None:
        await self._request("DELETE", f"/income/{income_id}")

    # Expenses

    async def list_expenses(self) -> List[MoneyEntry]:
        return [_parse(_expense_from_json, item, "expense") for item in await self._request("GET", "/expenses")]

    async def create_expense(self, entry: MoneyEntry) -> MoneyEntry:
        data = await self._request(
            "POST",
            "/expenses",
            json={
                "category": entry.label,
                "amount": entry.amount,
                "frequency": entry.frequency,
                "description": entry.description,
            },
        )
        return _parse(_expense_from_json, data, "expense")

    async def delete_expense(self, expense_id: str) -> None:
        await self._request("DELETE", f"/expenses/{expense_id}")
