"""
Unit tests for FastAPI endpoints.

Tests the health check and the authenticated settings endpoints.
"""
import pytest
from fastapi import status

from payroll_admin.services import SettingsStore, StorageFailure


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    def test_health_check(self, api_client):
        """Test basic health check endpoint."""
        response = api_client.get("/health")
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data


class TestSettingsAuthentication:
    """Tests that every settings endpoint requires a bearer token."""

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/api/settings"),
            ("get", "/api/settings/company"),
            ("put", "/api/settings/company"),
        ],
    )
    def test_requires_auth(self, api_client, method, path):
        """Test that unauthenticated requests are rejected."""
        kwargs = {"json": {"settings": {"name": "Acme"}}} if method == "put" else {}
        response = getattr(api_client, method)(path, **kwargs)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_rejects_invalid_token(self, api_client):
        """Test that a malformed token is rejected."""
        response = api_client.get(
            "/api/settings", headers={"Authorization": "Bearer invalid.token.here"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_rejects_refresh_token(self, api_client):
        """Test that a refresh token cannot be used as an access token."""
        login = api_client.post(
            "/api/auth/login", json={"username": "admin", "password": "Admin123!"}
        )
        refresh_token = login.json()["refresh_token"]

        response = api_client.get(
            "/api/settings", headers={"Authorization": f"Bearer {refresh_token}"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestSettingsEndpoints:
    """Tests for the settings endpoints."""

    def test_list_settings_empty(self, api_client, auth_headers):
        """Test listing settings when nothing is stored."""
        response = api_client.get("/api/settings", headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {}

    def test_put_then_get(self, api_client, auth_headers):
        """Test that a stored blob is returned as-is."""
        blob = {"workStart": "08:00", "workEnd": "17:00", "gracePeriodMinutes": 15}
        response = api_client.put(
            "/api/settings/attendance", json={"settings": blob}, headers=auth_headers
        )
        assert response.status_code == status.HTTP_200_OK

        response = api_client.get("/api/settings/attendance", headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == blob

    def test_put_returns_full_record(self, api_client, auth_headers):
        """Test that the upsert response carries the record and its writer."""
        me = api_client.get("/api/auth/me", headers=auth_headers).json()

        response = api_client.put(
            "/api/settings/company", json={"settings": {"name": "Acme"}}, headers=auth_headers
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["category"] == "company"
        assert data["settings"] == {"name": "Acme"}
        assert data["updated_by"] == me["id"]
        assert data["created_at"]
        assert data["updated_at"]

    def test_put_twice_keeps_one_record(self, api_client, auth_headers):
        """Test that repeated upserts replace the blob in place."""
        for payroll in ({"payPeriod": "MONTHLY"}, {"payPeriod": "SEMI_MONTHLY"}):
            response = api_client.put(
                "/api/settings/payroll", json={"settings": payroll}, headers=auth_headers
            )
            assert response.status_code == status.HTTP_200_OK

        response = api_client.get("/api/settings", headers=auth_headers)
        assert response.json() == {"payroll": {"payPeriod": "SEMI_MONTHLY"}}

    def test_list_settings(self, api_client, auth_headers):
        """Test that list maps every category to its blob."""
        api_client.put("/api/settings/A", json={"settings": {"x": 1}}, headers=auth_headers)
        api_client.put("/api/settings/B", json={"settings": {"y": 2}}, headers=auth_headers)

        response = api_client.get("/api/settings", headers=auth_headers)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"A": {"x": 1}, "B": {"y": 2}}

    def test_get_unknown_category(self, api_client, auth_headers):
        """Test that an unknown category returns 404."""
        response = api_client.get("/api/settings/missing", headers=auth_headers)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Settings category not found"

    @pytest.mark.parametrize("body", [{}, {"settings": None}, {"settings": {}}])
    def test_put_without_settings(self, api_client, auth_headers, body):
        """Test that a missing blob returns 400 and writes nothing."""
        response = api_client.put("/api/settings/company", json=body, headers=auth_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Settings data is required"

        response = api_client.get("/api/settings", headers=auth_headers)
        assert response.json() == {}

    def test_put_without_body(self, api_client, auth_headers):
        """Test that an empty request body returns 400."""
        response = api_client.put("/api/settings/company", headers=auth_headers)
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.parametrize("blob", [False, 0])
    def test_put_falsy_scalar(self, api_client, auth_headers, blob):
        """Test that falsy scalars are stored rather than treated as missing."""
        response = api_client.put(
            "/api/settings/flags", json={"settings": blob}, headers=auth_headers
        )
        assert response.status_code == status.HTTP_200_OK

        response = api_client.get("/api/settings/flags", headers=auth_headers)
        assert response.json() == blob
        assert type(response.json()) is type(blob)


class TestSettingsStorageErrors:
    """Tests that storage failures become generic 500 responses."""

    def test_list_storage_failure(self, api_client, auth_headers, mocker):
        """Test that a failing list returns 500 without internal details."""
        mocker.patch.object(
            SettingsStore,
            "list",
            side_effect=StorageFailure("connection refused on 10.0.0.5", "list"),
        )
        response = api_client.get("/api/settings", headers=auth_headers)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "Failed to fetch settings"}

    def test_upsert_storage_failure(self, api_client, auth_headers, mocker):
        """Test that a failing upsert returns 500 and is logged."""
        mocker.patch.object(
            SettingsStore,
            "upsert",
            side_effect=StorageFailure("disk I/O error", "upsert", "company"),
        )
        logger_error = mocker.patch("payroll_admin.main.logger.error")

        response = api_client.put(
            "/api/settings/company", json={"settings": {"name": "Acme"}}, headers=auth_headers
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "Failed to update settings"}
        assert "disk I/O error" not in response.text
        assert "category=company" in logger_error.call_args[0][0]
