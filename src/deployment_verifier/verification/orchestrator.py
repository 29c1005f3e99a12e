"""
Verification Orchestrator

Drives verification of every contract in an artifact table, one at a time,
and collects the outcome of each into a batch report. A failure on one
contract never stops the remaining ones; re-running the batch is safe because
already verified contracts are classified as such.
"""

import logging
from typing import Optional

from ..artifact_table import ArtifactDescriptor, ArtifactTable
from .classification import classify_failure
from .outcome import BatchReport, VerificationOutcome
from .service import VerificationService

logger = logging.getLogger(__name__)


class BatchListener:
    """Receives progress notifications from the orchestrator."""

    def on_start(self, descriptor: ArtifactDescriptor) -> None:
        pass

    def on_outcome(self, descriptor: ArtifactDescriptor, outcome: VerificationOutcome) -> None:
        pass


class VerificationOrchestrator:
    """Runs one verification pass over an artifact table."""

    def __init__(self, service: VerificationService, listener: Optional[BatchListener] = None):
        self.service = service
        self.listener = listener or BatchListener()

    def verify_one(self, descriptor: ArtifactDescriptor) -> VerificationOutcome:
        """Verify a single contract and classify the result."""
        try:
            self.service.verify(
                descriptor.address,
                descriptor.constructor_args,
                descriptor.source_ref
            )
        except Exception as e:
            outcome = classify_failure(e)
            if outcome.is_failure:
                logger.warning("Verification of %s failed: %s", descriptor.name, outcome.reason)
            else:
                logger.info("%s is already verified", descriptor.name)
            return outcome

        logger.info("%s verified", descriptor.name)
        return VerificationOutcome.verified()

    def _notify(self, callback, descriptor: ArtifactDescriptor, *args) -> None:
        # Progress output must not decide whether the batch completes
        try:
            callback(descriptor, *args)
        except Exception:
            logger.exception("Progress listener failed for %s", descriptor.name)

    def run_batch(self, table: ArtifactTable) -> BatchReport:
        """
        Verify every contract in table order.

        Args:
            table: Resolved, non-empty artifact table

        Returns:
            Finalized BatchReport with one outcome per contract, in table order
        """
        report = BatchReport()

        for descriptor in table:
            self._notify(self.listener.on_start, descriptor)
            outcome = self.verify_one(descriptor)
            report.record(descriptor.name, outcome)
            self._notify(self.listener.on_outcome, descriptor, outcome)

        counts = report.counts()
        logger.info(
            "Batch complete: %s",
            ', '.join(f"{kind.value}={count}" for kind, count in counts.items())
        )
        return report.finalize()
