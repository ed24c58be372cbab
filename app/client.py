"""
Async client for the registry API.

Registration calls validate the record locally first, the way the web form
does, so obvious mistakes never leave the caller. The server validates again
on its own; pass ``validate=False`` to skip the local check.
"""

from typing import Any, Dict, List, Optional

import httpx

from app.config import settings
from app.services.record_validator import validate_donor, validate_hospital
from app.utils.exceptions import (
    AuthError,
    ConflictError,
    FieldError,
    NotFoundError,
    PersistenceError,
    RecordValidationError,
)
from app.utils.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10


class RegistryClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_prefix: str = settings.API_PREFIX,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_prefix = api_prefix.rstrip("/")
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "RegistryClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.api_prefix}{path}"
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"Registry request timed out: {method} {url}")
            raise PersistenceError(f"Request timed out: {method} {url}") from e

        if response.is_success:
            return response.json()

        self._raise_for_response(response)

    @staticmethod
    def _raise_for_response(response: httpx.Response) -> None:
        try:
            body = response.json()
        except ValueError:
            body = {}
        detail = body.get("detail") if isinstance(body, dict) else None

        if response.status_code == 404:
            raise NotFoundError(detail)
        if response.status_code == 400:
            if "errors" in body:
                errors = [FieldError(**error) for error in body["errors"]]
                raise RecordValidationError(errors, detail)
            if detail == AuthError.default_detail:
                raise AuthError()
            if detail == ConflictError.default_detail:
                raise ConflictError(detail)
        if response.status_code >= 500:
            raise PersistenceError(detail)
        response.raise_for_status()

    async def register_donor(self, donor: Dict[str, Any], validate: bool = True) -> Dict[str, Any]:
        if validate:
            record = validate_donor(donor).raise_for_errors()
            donor = record.model_dump(mode="json", by_alias=True)
        return await self._request("POST", "/donors", json=donor)

    async def list_donors(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/donors")

    async def get_donor(self, donor_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/donors/{donor_id}")

    async def delete_donor(self, donor_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/donors/{donor_id}")

    async def register_hospital(
        self, hospital: Dict[str, Any], validate: bool = True
    ) -> Dict[str, Any]:
        if validate:
            record = validate_hospital(hospital).raise_for_errors()
            hospital = record.model_dump(mode="json", by_alias=True)
        return await self._request("POST", "/hospitals", json=hospital)

    async def list_hospitals(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/hospitals")

    async def blood_group_dashboard(self) -> Dict[str, Any]:
        return await self._request("GET", "/dashboard/blood-groups")

    async def signup(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/auth/signup", json={"email": email, "password": password}
        )

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
