"""
Outcome Classification

Maps verification service failures to outcomes. Explorers answer a repeated
submission of an already verified contract with an error; that answer is a
benign conflict and must not be reported as a failure.
"""

from typing import Tuple

from .outcome import VerificationOutcome

# Matched case-insensitively against the service message.
ALREADY_VERIFIED_MARKERS: Tuple[str, ...] = (
    "already verified",
    "already been verified",
)


def mentions_already_verified(message: str) -> bool:
    lowered = message.lower()
    return any(marker in lowered for marker in ALREADY_VERIFIED_MARKERS)


def classify_failure(error: BaseException) -> VerificationOutcome:
    """
    Classify an error raised by a verification service.

    Args:
        error: Exception raised while verifying one contract

    Returns:
        ALREADY_VERIFIED when the message carries a known marker phrase,
        otherwise FAILED with the message preserved verbatim
    """
    message = getattr(error, 'message', None)
    if not isinstance(message, str):
        message = str(error) or type(error).__name__

    if mentions_already_verified(message):
        return VerificationOutcome.already_verified()
    return VerificationOutcome.failed(message)
