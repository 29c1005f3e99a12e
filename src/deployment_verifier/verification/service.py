"""
Verification Service Interface

Abstract capability consumed by the orchestrator. Implementations submit one
contract to a block explorer and either return normally or raise
VerificationError.
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence


class VerificationService(ABC):
    """Abstract base class for verification backends."""

    @abstractmethod
    def verify(self, address: str, constructor_args: Sequence[Any], source_ref: str) -> None:
        """
        Submit a deployed contract for source verification.

        Args:
            address: Deployed contract address
            constructor_args: Literal constructor arguments, in order
            source_ref: Fully-qualified source reference ``path/File.sol:Contract``

        Raises:
            VerificationError: if the explorer rejects the submission or
                cannot be reached
        """
        pass
