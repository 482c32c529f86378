"""
Tests for the email verification service.

These tests verify:
- Local email and code format checks short-circuit the backend
- Response envelopes and error bodies are unwrapped
- The resend countdown follows the backend's expiry
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from admission_wizard.core.http import ApiError
from admission_wizard.modules.email_verification.schemas import VerificationType
from admission_wizard.modules.email_verification.service import (
    EmailVerificationService,
    ResendCountdown,
    ResendTooSoonError,
)


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    return client


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(mock_client, clock):
    return EmailVerificationService(mock_client, countdown=ResendCountdown(clock))


class TestResendCountdown:
    """Tests for ResendCountdown."""

    def test_idle_countdown_allows_resend(self, clock):
        countdown = ResendCountdown(clock)

        assert countdown.can_resend is True
        assert countdown.remaining_seconds == 0

    def test_counts_down(self, clock):
        countdown = ResendCountdown(clock)
        countdown.start(120)

        clock.now += 30
        assert countdown.remaining_seconds == 90
        assert countdown.remaining_minutes == 2
        assert countdown.can_resend is False

        clock.now += 90
        assert countdown.can_resend is True


class TestSendCode:
    """Tests for EmailVerificationService.send_code."""

    @pytest.mark.asyncio
    async def test_invalid_email_never_reaches_backend(self, service, mock_client):
        response = await service.send_code("no-es-un-email")

        assert response.success is False
        assert response.message == "El formato del email no es válido"
        mock_client.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_email(self, service):
        response = await service.send_code("  ")

        assert response.message == "El email es obligatorio"

    @pytest.mark.asyncio
    async def test_sends_camel_case_request(self, service, mock_client):
        mock_client.post = AsyncMock(
            return_value={"success": True, "data": {"message": "Enviado", "expiresInMinutes": 10}}
        )

        response = await service.send_code(
            "pedro@example.com",
            VerificationType.REGISTRATION,
            rut="33.333.333-3",
            first_name="Pedro",
            last_name="Soto",
        )

        assert response.success is True
        assert response.message == "Enviado"
        assert response.expires_in_minutes == 10
        path = mock_client.post.call_args.args[0]
        body = mock_client.post.call_args.kwargs["json"]
        assert path == "/email/send-verification"
        assert body == {
            "email": "pedro@example.com",
            "type": "REGISTRATION",
            "rut": "33.333.333-3",
            "firstName": "Pedro",
            "lastName": "Soto",
        }
        assert service.countdown.remaining_seconds == 600

    @pytest.mark.asyncio
    async def test_default_expiry(self, service, mock_client):
        mock_client.post = AsyncMock(return_value={"success": True})

        response = await service.send_code("pedro@example.com")

        assert response.expires_in_minutes == 15
        assert service.countdown.remaining_minutes == 15

    @pytest.mark.asyncio
    async def test_unparseable_expiry_uses_default(self, service, mock_client):
        mock_client.post = AsyncMock(
            return_value={"success": True, "data": {"expiresInMinutes": "quince"}}
        )

        response = await service.send_code("pedro@example.com")

        assert response.success is True
        assert response.expires_in_minutes == 15
        assert service.countdown.remaining_minutes == 15

    @pytest.mark.asyncio
    async def test_backend_error_becomes_failed_response(self, service, mock_client):
        mock_client.post = AsyncMock(
            side_effect=ApiError(
                "HTTP 400",
                status_code=400,
                payload={"success": False, "error": {"code": "EMAIL_008", "message": "Email ya registrado"}},
            )
        )

        response = await service.send_code("pedro@example.com")

        assert response.success is False
        assert response.message == "Email ya registrado"
        assert service.countdown.can_resend is True


class TestVerifyCode:
    """Tests for EmailVerificationService.verify_code."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("code", ["12345", "1234567", "12a456", "١٢٣٤٥٦"])
    async def test_code_must_be_six_digits(self, service, mock_client, code):
        response = await service.verify_code("pedro@example.com", code)

        assert response.is_valid is False
        assert response.message == "El código debe tener 6 dígitos"
        mock_client.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_valid_code(self, service, mock_client):
        mock_client.post = AsyncMock(
            return_value={"success": True, "data": {"isValid": True, "email": "pedro@example.com"}}
        )

        response = await service.verify_code("pedro@example.com", "123456")

        assert response.is_valid is True
        mock_client.post.assert_awaited_once_with(
            "/email/verify-code", json={"email": "pedro@example.com", "code": "123456"}
        )

    @pytest.mark.asyncio
    async def test_verified_flag_is_accepted(self, service, mock_client):
        mock_client.post = AsyncMock(return_value={"verified": True})

        assert (await service.verify_code("pedro@example.com", "123456")).is_valid is True

    @pytest.mark.asyncio
    async def test_rejected_code(self, service, mock_client):
        mock_client.post = AsyncMock(
            side_effect=ApiError("Código inválido", status_code=400, payload={"message": "Código inválido"})
        )

        response = await service.verify_code("pedro@example.com", "000000")

        assert response.success is False
        assert response.is_valid is False
        assert response.message == "Código inválido"


class TestResendCode:
    """Tests for EmailVerificationService.resend_code."""

    @pytest.mark.asyncio
    async def test_too_soon(self, service, mock_client):
        mock_client.post = AsyncMock(return_value={"success": True, "expiresIn": 15})
        await service.send_code("pedro@example.com")

        with pytest.raises(ResendTooSoonError) as exc_info:
            await service.resend_code("pedro@example.com")

        assert exc_info.value.error_code == "RESEND_TOO_SOON"
        assert "15 minutos" in exc_info.value.message
        assert mock_client.post.await_count == 1

    @pytest.mark.asyncio
    async def test_after_countdown(self, service, mock_client, clock):
        mock_client.post = AsyncMock(return_value={"success": True})
        await service.send_code("pedro@example.com")
        clock.now += 15 * 60

        response = await service.resend_code("pedro@example.com")

        assert response.success is True
        assert mock_client.post.await_count == 2
        assert mock_client.post.call_args.args[0] == "/email/send-verification"


class TestExistenceChecks:
    """Tests for email and RUT existence checks."""

    @pytest.mark.asyncio
    async def test_email_exists(self, service, mock_client):
        mock_client.get = AsyncMock(return_value={"exists": True})

        assert await service.check_email_exists("pedro@example.com") is True
        mock_client.get.assert_awaited_once_with(
            "/email/check-exists", params={"email": "pedro@example.com"}
        )

    @pytest.mark.asyncio
    async def test_bare_boolean(self, service, mock_client):
        mock_client.get = AsyncMock(return_value=False)

        assert await service.check_email_exists("pedro@example.com") is False

    @pytest.mark.asyncio
    async def test_rut_exists_in_envelope(self, service, mock_client):
        mock_client.get = AsyncMock(return_value={"success": True, "data": {"exists": False}})

        assert await service.check_rut_exists("33.333.333-3") is False
        assert mock_client.get.call_args.args[0] == "/users/check-rut"

    @pytest.mark.asyncio
    async def test_backend_down_is_none(self, service, mock_client):
        mock_client.get = AsyncMock(side_effect=ApiError("Error de conexión"))

        assert await service.check_rut_exists("33.333.333-3") is None
