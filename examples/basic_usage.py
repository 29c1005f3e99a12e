#!/usr/bin/env python3
"""
Basic Usage Example for Deployment Verifier

This example demonstrates the core functionality without touching a network:
1. Loading an artifact table from a YAML file
2. Running a verification batch against an in-memory explorer
3. Re-running the batch to show that repeated verification is harmless
"""

from pathlib import Path

from deployment_verifier.artifact_table import load_table_file
from deployment_verifier.errors import VerificationError
from deployment_verifier.networks import get_network
from deployment_verifier.reporting import ConsoleReporter
from deployment_verifier.verification import VerificationOrchestrator, VerificationService


class InMemoryExplorer(VerificationService):
    """Explorer stand-in that rejects one contract and remembers the rest."""

    def __init__(self, rejected=None):
        self.rejected = set(rejected or [])
        self.verified = set()

    def verify(self, address, constructor_args, source_ref):
        if source_ref in self.rejected:
            raise VerificationError("Fail - Unable to verify. Constructor arguments mismatch")
        if address in self.verified:
            raise VerificationError("Already Verified")
        self.verified.add(address)


def run(explorer, loaded):
    reporter = ConsoleReporter(get_network(loaded.network or 'base-sepolia'))
    reporter.on_begin()
    report = VerificationOrchestrator(explorer, reporter).run_batch(loaded.table)
    reporter.render_summary(report, loaded.table)
    return report


def main():
    table_path = Path(__file__).parent / "contracts.yaml"
    loaded = load_table_file(table_path)
    print(f"📦 Loaded {len(loaded.table)} contracts from {table_path}\n")

    explorer = InMemoryExplorer(rejected={'src/PointsEscrow.sol:PointsEscrow'})

    print("=== First run ===\n")
    run(explorer, loaded)

    print("\n=== Second run ===\n")
    report = run(explorer, loaded)

    print("\nFailed contracts:")
    for name, reason in report.failed():
        print(f"   • {name}: {reason}")


if __name__ == "__main__":
    main()
