"""
Email Verification Service

Client for the backend's verification-code endpoints, used before an account
(and therefore an application) can be created.

This module implements:
1. Send Code:
   - Local email format check
   - ``POST /email/send-verification`` with email, type and applicant data
   - Starts the resend countdown from the backend's expiry

2. Verify Code:
   - Local 6-digit format check
   - ``POST /email/verify-code``

3. Resend Code:
   - Refused while the countdown is running (``ResendTooSoonError``)
   - Otherwise sends a new code through the same endpoint

4. Existence Checks:
   - Email and RUT lookups that answer None when the backend is unreachable

Backend failures on send/verify come back as unsuccessful responses with the
backend's message instead of raising.
"""

import logging
import math
import re
import time
from collections.abc import Callable
from typing import Any

from admission_wizard.core.http import ApiClient, ApiError, extract_error_message
from admission_wizard.core.logging_config import mask_rut
from admission_wizard.modules.email_verification.schemas import (
    CODE_LENGTH,
    DEFAULT_EXPIRY_MINUTES,
    SendCodeRequest,
    SendCodeResponse,
    VerificationType,
    VerifyCodeResponse,
)
from admission_wizard.modules.wizard.service import WizardError
from admission_wizard.modules.wizard.validators import is_valid_email

logger = logging.getLogger(__name__)

CODE_PATTERN = re.compile(rf"^[0-9]{{{CODE_LENGTH}}}$")


class ResendTooSoonError(WizardError):
    """Raised when a code is resent before the countdown elapses."""

    def __init__(self, remaining_seconds: int):
        self.remaining_seconds = remaining_seconds
        minutes = max(1, math.ceil(remaining_seconds / 60))
        super().__init__(
            message=f"Debe esperar {minutes} minutos para reenviar",
            error_code="RESEND_TOO_SOON",
        )


class ResendCountdown:
    """Seconds left before another code may be requested."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._deadline: float | None = None

    def start(self, seconds: float) -> None:
        self._deadline = self._clock() + seconds

    def reset(self) -> None:
        self._deadline = None

    @property
    def remaining_seconds(self) -> int:
        if self._deadline is None:
            return 0
        return max(0, math.ceil(self._deadline - self._clock()))

    @property
    def remaining_minutes(self) -> int:
        return math.ceil(self.remaining_seconds / 60)

    @property
    def can_resend(self) -> bool:
        return self.remaining_seconds <= 0


def _unwrap_data(body: Any) -> Any:
    # Backend answers {"success": true, "data": {...}, "timestamp": ...}
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        return body["data"]
    return body


def _expiry_minutes(data: dict) -> int:
    raw = data.get("expiresInMinutes") or data.get("expiresIn")
    try:
        return int(raw) if raw else DEFAULT_EXPIRY_MINUTES
    except (TypeError, ValueError):
        logger.warning(f"Ignoring unparseable code expiry {raw!r}")
        return DEFAULT_EXPIRY_MINUTES


def _exists_flag(body: Any) -> bool | None:
    body = _unwrap_data(body)
    if isinstance(body, bool):
        return body
    if isinstance(body, dict) and "exists" in body:
        return bool(body["exists"])
    return None


class EmailVerificationService:
    """Verification-code flow for one session."""

    def __init__(self, client: ApiClient, countdown: ResendCountdown | None = None):
        self.client = client
        self.countdown = countdown or ResendCountdown()

    async def send_code(
        self,
        email: str,
        verification_type: VerificationType = VerificationType.REGISTRATION,
        rut: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> SendCodeResponse:
        """Request a verification code for ``email``."""
        email = (email or "").strip()
        if not email:
            return SendCodeResponse(success=False, message="El email es obligatorio")
        if not is_valid_email(email):
            return SendCodeResponse(success=False, message="El formato del email no es válido")

        request = SendCodeRequest(
            email=email,
            type=verification_type,
            rut=rut,
            first_name=first_name,
            last_name=last_name,
        )
        logger.info(
            f"Sending {verification_type.value} code to {email}"
            + (f" (RUT {mask_rut(rut)})" if rut else "")
        )

        try:
            body = await self.client.post(
                "/email/send-verification",
                json=request.model_dump(mode="json", by_alias=True, exclude_none=True),
            )
        except ApiError as e:
            message = extract_error_message(e.payload, e.message or "")
            logger.error(f"Sending verification code to {email} failed: {message}")
            return SendCodeResponse(
                success=False,
                message=message or "Error al enviar el código de verificación",
            )

        data = _unwrap_data(body) if isinstance(body, dict) else {}
        data = data if isinstance(data, dict) else {}
        expires_in = _expiry_minutes(data)
        success = data.get("success") is not False
        if success:
            self.countdown.start(expires_in * 60)

        return SendCodeResponse(
            success=success,
            message=data.get("message") or "Código enviado exitosamente",
            expires_in_minutes=expires_in,
            verification_token=data.get("verificationToken"),
        )

    async def verify_code(self, email: str, code: str) -> VerifyCodeResponse:
        """Check a verification code the user typed in."""
        code = (code or "").strip()
        if not code:
            return VerifyCodeResponse(
                success=False, message="El código de verificación es obligatorio"
            )
        if not CODE_PATTERN.match(code):
            return VerifyCodeResponse(
                success=False, message=f"El código debe tener {CODE_LENGTH} dígitos"
            )

        try:
            body = await self.client.post(
                "/email/verify-code", json={"email": email.strip(), "code": code}
            )
        except ApiError as e:
            message = extract_error_message(e.payload, e.message or "")
            logger.warning(f"Verification code for {email} rejected: {message}")
            return VerifyCodeResponse(
                success=False, message=message or "Error al verificar el código"
            )

        data = _unwrap_data(body) if isinstance(body, dict) else {}
        data = data if isinstance(data, dict) else {}
        is_valid = bool(data.get("isValid") or data.get("verified"))
        if is_valid:
            self.countdown.reset()
        logger.info(f"Verification code for {email} {'accepted' if is_valid else 'not accepted'}")

        return VerifyCodeResponse(
            success=data.get("success") is not False,
            message=data.get("message") or "Código verificado exitosamente",
            is_valid=is_valid,
        )

    async def resend_code(
        self,
        email: str,
        verification_type: VerificationType = VerificationType.REGISTRATION,
    ) -> SendCodeResponse:
        """
        Send a new code once the countdown has elapsed.

        Raises:
            ResendTooSoonError: If the previous code's countdown is still running
        """
        if not self.countdown.can_resend:
            raise ResendTooSoonError(self.countdown.remaining_seconds)
        return await self.send_code(email, verification_type)

    async def check_email_exists(self, email: str) -> bool | None:
        """Whether an account already uses ``email``; None when the check failed."""
        try:
            body = await self.client.get("/email/check-exists", params={"email": email})
        except ApiError as e:
            logger.error(f"Email existence check failed: {e.message}")
            return None
        return _exists_flag(body)

    async def check_rut_exists(self, rut: str) -> bool | None:
        """Whether an account already uses ``rut``; None when the check failed."""
        try:
            body = await self.client.get("/users/check-rut", params={"rut": rut})
        except ApiError as e:
            logger.error(f"RUT existence check for {mask_rut(rut)} failed: {e.message}")
            return None
        return _exists_flag(body)
