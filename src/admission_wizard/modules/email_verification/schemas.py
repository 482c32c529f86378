"""
Email Verification Schemas
"""

import enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

CODE_LENGTH = 6
DEFAULT_EXPIRY_MINUTES = 15


class VerificationType(str, enum.Enum):
    """Purpose of a verification code; must match the backend."""

    REGISTRATION = "REGISTRATION"
    PASSWORD_RESET = "PASSWORD_RESET"


class SendCodeRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: str
    type: VerificationType = VerificationType.REGISTRATION
    rut: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class SendCodeResponse(BaseModel):
    success: bool
    message: str
    expires_in_minutes: int | None = None
    verification_token: str | None = None


class VerifyCodeResponse(BaseModel):
    success: bool
    message: str
    is_valid: bool = False
