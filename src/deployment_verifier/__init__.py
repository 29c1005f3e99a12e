"""
Deployment Verifier

Batch orchestrator that submits already-deployed contracts to a block explorer
for source verification and reports the outcome of every contract in the batch.
"""

from .errors import DeploymentVerifierError, FatalConfigurationError, VerificationError

__version__ = "0.1.0"

__all__ = [
    'DeploymentVerifierError',
    'FatalConfigurationError',
    'VerificationError',
    '__version__',
]
