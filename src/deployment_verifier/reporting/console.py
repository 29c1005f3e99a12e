"""
Console Reporter

Prints per-contract progress while a batch runs and the final summary with
explorer links afterwards.
"""

import json
import sys
from typing import Optional, TextIO

from ..artifact_table import ArtifactDescriptor, ArtifactTable
from ..networks import NetworkConfig
from ..verification import BatchListener, BatchReport, OutcomeKind, VerificationOutcome


class ConsoleReporter(BatchListener):
    """Human-readable report on a text stream."""

    def __init__(self, network: NetworkConfig, stream: Optional[TextIO] = None):
        self.network = network
        self.stream = stream or sys.stdout

    def _print(self, text: str = "") -> None:
        print(text, file=self.stream)

    def on_begin(self) -> None:
        self._print(f"🔍 Verifying contracts on {self.network.display_name}...\n")

    def on_start(self, descriptor: ArtifactDescriptor) -> None:
        self._print(f"📝 Verifying {descriptor.name}...")
        self._print(f"   Address: {descriptor.address}")
        self._print(f"   Args: {json.dumps(list(descriptor.constructor_args))}")

    def on_outcome(self, descriptor: ArtifactDescriptor, outcome: VerificationOutcome) -> None:
        if outcome.kind is OutcomeKind.VERIFIED:
            self._print(f"✅ {descriptor.name} verified successfully!\n")
        elif outcome.kind is OutcomeKind.ALREADY_VERIFIED:
            self._print(f"ℹ️  {descriptor.name} is already verified\n")
        else:
            self._print(f"❌ Error verifying {descriptor.name}:")
            for line in outcome.reason.splitlines() or ['']:
                self._print(f"   {line}")
            self._print()

    def render_links(self, table: ArtifactTable) -> None:
        """Print one explorer link per contract."""
        self._print("📊 Contracts:")
        for descriptor in table:
            self._print(f"   {descriptor.name}: {self.network.address_url(descriptor.address)}")

    def render_summary(self, report: BatchReport, table: ArtifactTable) -> None:
        counts = report.counts()
        self._print("✅ Verification complete!")
        self._print(
            f"   {len(report)} contracts: "
            f"{counts[OutcomeKind.VERIFIED]} verified, "
            f"{counts[OutcomeKind.ALREADY_VERIFIED]} already verified, "
            f"{counts[OutcomeKind.FAILED]} failed"
        )
        self._print()
        self.render_links(table)

    def render_json(self, report: BatchReport, table: ArtifactTable) -> None:
        """Print the report as a JSON document."""
        document = report.to_dict()
        document['network'] = self.network.name
        for entry in document['results']:
            descriptor = table.get(entry['name'])
            entry['address'] = descriptor.address
            entry['url'] = self.network.address_url(descriptor.address)
        self._print(json.dumps(document, indent=2))
