import pytest

from tests.conftest import TestDataFactory, assert_validation_error

pytestmark = pytest.mark.asyncio

HOSPITALS_URL = "/api/hospitals"


class TestHospitalEndpoints:
    async def test_register_hospital(self, client):
        payload = TestDataFactory.hospital_payload()

        response = await client.post(HOSPITALS_URL, json=payload)

        assert response.status_code == 201
        data = response.json()
        assert data["contactPerson"] == payload["contactPerson"]
        assert data["blood_group"] == "AB+"
        assert data["unit"] == "4"
        assert "id" in data and "createdAt" in data

    async def test_missing_contact_person_rejected(self, client):
        payload = TestDataFactory.hospital_payload()
        del payload["contactPerson"]

        response = await client.post(HOSPITALS_URL, json=payload)

        assert_validation_error(response, "contactPerson")

    async def test_invalid_email_rejected(self, client):
        response = await client.post(
            HOSPITALS_URL, json=TestDataFactory.hospital_payload(email="nope")
        )

        assert_validation_error(response, "email")

    async def test_list_hospitals(self, client):
        await client.post(HOSPITALS_URL, json=TestDataFactory.hospital_payload(name="North"))
        await client.post(HOSPITALS_URL, json=TestDataFactory.hospital_payload(name="South"))

        response = await client.get(HOSPITALS_URL)

        assert response.status_code == 200
        assert [h["name"] for h in response.json()] == ["North", "South"]

    async def test_list_hospitals_empty(self, client):
        response = await client.get(HOSPITALS_URL)

        assert response.status_code == 200
        assert response.json() == []
