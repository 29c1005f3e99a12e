"""
Error types shared across the deployment verifier.
"""


class DeploymentVerifierError(Exception):
    """Base class for all deployment verifier errors."""


class FatalConfigurationError(DeploymentVerifierError):
    """The artifact table or runtime configuration cannot be used.

    Raised before the batch starts; it is never caught per contract and
    aborts the whole run with a non-zero exit code.
    """


class VerificationError(DeploymentVerifierError):
    """A verification service rejected or could not process one contract."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
