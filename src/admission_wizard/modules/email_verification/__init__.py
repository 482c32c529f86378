"""
Email Verification Module

Send, verify and resend 6-digit verification codes, plus email/RUT
existence checks used during family registration.
"""

from .schemas import SendCodeResponse, VerificationType, VerifyCodeResponse
from .service import EmailVerificationService, ResendCountdown, ResendTooSoonError

__all__ = [
    "EmailVerificationService",
    "ResendCountdown",
    "ResendTooSoonError",
    "VerificationType",
    "SendCodeResponse",
    "VerifyCodeResponse",
]
