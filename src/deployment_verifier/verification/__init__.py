"""
Verification Module

Verification services, outcome classification and the batch orchestrator.
"""

from .outcome import BatchReport, OutcomeKind, VerificationOutcome
from .classification import ALREADY_VERIFIED_MARKERS, classify_failure
from .service import VerificationService
from .orchestrator import BatchListener, VerificationOrchestrator
from .hardhat_service import HardhatVerificationService
from .etherscan_service import EtherscanVerificationService
from .build_info import BuildInfoStore, CompilerInput

__all__ = [
    'BatchReport',
    'OutcomeKind',
    'VerificationOutcome',
    'ALREADY_VERIFIED_MARKERS',
    'classify_failure',
    'VerificationService',
    'BatchListener',
    'VerificationOrchestrator',
    'HardhatVerificationService',
    'EtherscanVerificationService',
    'BuildInfoStore',
    'CompilerInput',
]
