"""
Tests for RegistryClient, run against the app in-process.
"""

import uuid

import httpx
import pytest

from app.client import RegistryClient
from app.utils.exceptions import (
    AuthError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    RecordValidationError,
)
from tests.conftest import TestDataFactory

pytestmark = pytest.mark.asyncio


@pytest.fixture
async def registry(client):
    async with RegistryClient(http_client=client) as registry_client:
        yield registry_client


class TestDonorCalls:
    async def test_register_list_get_delete(self, registry):
        created = await registry.register_donor(TestDataFactory.donor_payload())

        assert [d["id"] for d in await registry.list_donors()] == [created["id"]]
        assert (await registry.get_donor(created["id"]))["name"] == "Jane Doe"

        deleted = await registry.delete_donor(created["id"])
        assert deleted["id"] == created["id"]

        with pytest.raises(NotFoundError):
            await registry.get_donor(created["id"])

    async def test_local_validation_stops_bad_record(self, registry, client):
        with pytest.raises(RecordValidationError) as exc_info:
            await registry.register_donor(TestDataFactory.donor_payload(age=70))

        assert exc_info.value.fields == ["age"]
        assert (await client.get("/api/donors")).json() == []

    async def test_server_rejection_is_mapped(self, registry):
        with pytest.raises(RecordValidationError) as exc_info:
            await registry.register_donor(
                TestDataFactory.donor_payload(phone="abc"), validate=False
            )

        assert exc_info.value.fields == ["phone"]
        assert exc_info.value.errors[0].message == "Invalid phone number"

    async def test_unknown_donor(self, registry):
        with pytest.raises(NotFoundError):
            await registry.delete_donor(str(uuid.uuid4()))


class TestOtherCalls:
    async def test_hospitals(self, registry):
        created = await registry.register_hospital(TestDataFactory.hospital_payload())

        hospitals = await registry.list_hospitals()
        assert [h["id"] for h in hospitals] == [created["id"]]

    async def test_dashboard(self, registry):
        await registry.register_donor(TestDataFactory.donor_payload(bloodGroup="AB-"))

        dashboard = await registry.blood_group_dashboard()

        assert dashboard["totalDonors"] == 1

    async def test_signup_and_login(self, registry):
        email = TestDataFactory.unique_email("staff")

        await registry.signup(email, "pass-word-1")
        with pytest.raises(ConflictError):
            await registry.signup(email, "pass-word-1")

        result = await registry.login(email, "pass-word-1")
        assert result["user"]["email"] == email

        with pytest.raises(AuthError):
            await registry.login(email, "wrong")


class TestTransportFailures:
    async def test_timeout_is_persistence_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://registry"
        )
        async with RegistryClient(http_client=http_client) as registry:
            with pytest.raises(PersistenceError):
                await registry.list_donors()
        await http_client.aclose()

    async def test_unreadable_body_rejection_is_validation_error(self):
        def handler(request):
            return httpx.Response(
                400,
                json={
                    "detail": "There was an error parsing the body",
                    "errors": [
                        {"field": "__root__", "message": "There was an error parsing the body"}
                    ],
                },
            )

        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://registry"
        )
        async with RegistryClient(http_client=http_client) as registry:
            with pytest.raises(RecordValidationError) as exc_info:
                await registry.register_hospital({}, validate=False)
        assert exc_info.value.fields == ["__root__"]
        await http_client.aclose()

    async def test_server_error_is_persistence_error(self):
        def handler(request):
            return httpx.Response(500, json={"detail": "Record store unavailable"})

        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://registry"
        )
        async with RegistryClient(http_client=http_client) as registry:
            with pytest.raises(PersistenceError) as exc_info:
                await registry.list_hospitals()
        assert exc_info.value.detail == "Record store unavailable"
        await http_client.aclose()
