"""
Test suite for outcome classification and the verification orchestrator.
"""

import io

import pytest

from deployment_verifier.artifact_table import build_table
from deployment_verifier.errors import VerificationError
from deployment_verifier.networks import get_network
from deployment_verifier.reporting import ConsoleReporter
from deployment_verifier.verification import (
    BatchListener,
    BatchReport,
    OutcomeKind,
    VerificationOrchestrator,
    VerificationOutcome,
    VerificationService,
    classify_failure,
)


def make_address(index):
    return '0x' + format(index, '040x')


def make_table(*names):
    return build_table([
        (name, make_address(i + 1), [make_address(100 + i)], f'src/{name}.sol:{name}')
        for i, name in enumerate(names)
    ])


class StubVerificationService(VerificationService):
    """Service returning scripted results keyed by address."""

    def __init__(self, results=None):
        # address -> None (success) or Exception to raise
        self.results = results or {}
        self.calls = []

    def verify(self, address, constructor_args, source_ref):
        self.calls.append((address, tuple(constructor_args), source_ref))
        result = self.results.get(address)
        if result is not None:
            raise result


class RegistryStub(VerificationService):
    """Remembers verified addresses and rejects repeated submissions like an explorer."""

    def __init__(self):
        self.verified = set()

    def verify(self, address, constructor_args, source_ref):
        if address in self.verified:
            raise VerificationError("Already Verified")
        self.verified.add(address)


class RecordingListener(BatchListener):

    def __init__(self):
        self.events = []

    def on_start(self, descriptor):
        self.events.append(('start', descriptor.name))

    def on_outcome(self, descriptor, outcome):
        self.events.append(('outcome', descriptor.name, outcome.kind))


class BrokenListener(BatchListener):

    def on_start(self, descriptor):
        raise RuntimeError("stdout closed")

    def on_outcome(self, descriptor, outcome):
        raise UnicodeEncodeError('charmap', '\U0001f4dd', 0, 1, 'character maps to <undefined>')


class TestClassifyFailure:
    """Test cases for classify_failure."""

    @pytest.mark.parametrize('message', [
        "Already Verified",
        "Contract source code already verified",
        "The contract 0xabc has already been verified on the block explorer.",
        "ALREADY VERIFIED",
    ])
    def test_already_verified_markers(self, message):
        outcome = classify_failure(VerificationError(message))

        assert outcome == VerificationOutcome.already_verified()

    def test_other_failure_keeps_message_verbatim(self):
        """Test that the failure reason is the service message, unchanged."""
        outcome = classify_failure(VerificationError("Constructor arguments mismatch"))

        assert outcome.kind is OutcomeKind.FAILED
        assert outcome.reason == "Constructor arguments mismatch"

    def test_generic_exception(self):
        outcome = classify_failure(ConnectionError("connection reset by peer"))

        assert outcome == VerificationOutcome.failed("connection reset by peer")

    def test_exception_without_message(self):
        outcome = classify_failure(TimeoutError())

        assert outcome == VerificationOutcome.failed("TimeoutError")


class TestVerificationOutcome:

    def test_reason_only_for_failures(self):
        with pytest.raises(ValueError):
            VerificationOutcome(OutcomeKind.FAILED)
        with pytest.raises(ValueError):
            VerificationOutcome(OutcomeKind.VERIFIED, "unexpected")

    def test_to_dict(self):
        assert VerificationOutcome.verified().to_dict() == {'status': 'verified'}
        assert VerificationOutcome.failed("boom").to_dict() == {'status': 'failed', 'reason': 'boom'}


class TestBatchReport:

    def test_counts_include_every_kind(self):
        report = BatchReport()
        report.record('A', VerificationOutcome.verified())

        assert report.counts() == {
            OutcomeKind.VERIFIED: 1,
            OutcomeKind.ALREADY_VERIFIED: 0,
            OutcomeKind.FAILED: 0,
        }

    def test_finalized_report_is_read_only(self):
        report = BatchReport()
        report.record('A', VerificationOutcome.verified())
        report.finalize()

        assert report.is_finalized
        with pytest.raises(RuntimeError):
            report.record('B', VerificationOutcome.verified())
        assert len(report) == 1


class TestVerificationOrchestrator:
    """Test cases for VerificationOrchestrator.run_batch."""

    def test_example_scenario(self):
        """Test success, already verified and failure in one batch."""
        table = make_table('A', 'B', 'C')
        service = StubVerificationService({
            table.get('B').address: VerificationError("Already Verified"),
            table.get('C').address: VerificationError("Constructor arguments mismatch"),
        })

        report = VerificationOrchestrator(service).run_batch(table)

        assert list(report.entries) == [
            ('A', VerificationOutcome.verified()),
            ('B', VerificationOutcome.already_verified()),
            ('C', VerificationOutcome.failed("Constructor arguments mismatch")),
        ]
        assert report.counts() == {
            OutcomeKind.VERIFIED: 1,
            OutcomeKind.ALREADY_VERIFIED: 1,
            OutcomeKind.FAILED: 1,
        }
        assert report.failed() == [('C', "Constructor arguments mismatch")]
        assert report.is_finalized

    def test_service_receives_descriptor_fields(self):
        table = make_table('A')
        service = StubVerificationService()

        VerificationOrchestrator(service).run_batch(table)

        descriptor = table.get('A')
        assert service.calls == [(descriptor.address, descriptor.constructor_args, 'src/A.sol:A')]

    def test_failure_does_not_abort_batch(self):
        """Test that contracts after a failure are still attempted."""
        table = make_table('A', 'B', 'C', 'D')
        service = StubVerificationService({
            table.get('A').address: VerificationError("rate limit"),
            table.get('B').address: RuntimeError("unexpected"),
        })

        report = VerificationOrchestrator(service).run_batch(table)

        assert len(service.calls) == 4
        assert [name for name, _ in report.entries] == ['A', 'B', 'C', 'D']
        assert report.outcome_for('B') == VerificationOutcome.failed("unexpected")
        assert report.outcome_for('D') == VerificationOutcome.verified()

    @pytest.mark.parametrize('size', [1, 3, 10])
    def test_all_failures_still_complete(self, size):
        """Test one report entry per contract even when every attempt fails."""
        names = [f'C{i}' for i in range(size)]
        table = make_table(*names)
        service = StubVerificationService({
            d.address: VerificationError(f"failed {d.name}") for d in table
        })

        report = VerificationOrchestrator(service).run_batch(table)

        assert [name for name, _ in report.entries] == names
        assert report.counts()[OutcomeKind.FAILED] == size

    def test_rerun_is_idempotent(self):
        """Test that a second run reports every contract as already verified."""
        table = make_table('A', 'B', 'C')
        registry = RegistryStub()
        orchestrator = VerificationOrchestrator(registry)

        first = orchestrator.run_batch(table)
        second = orchestrator.run_batch(table)

        assert all(o.kind is OutcomeKind.VERIFIED for _, o in first.entries)
        assert all(o.kind is OutcomeKind.ALREADY_VERIFIED for _, o in second.entries)

    def test_interrupt_propagates(self):
        table = make_table('A', 'B')
        service = StubVerificationService({table.get('A').address: KeyboardInterrupt()})

        with pytest.raises(KeyboardInterrupt):
            VerificationOrchestrator(service).run_batch(table)

    def test_listener_events_in_order(self):
        table = make_table('A', 'B')
        service = StubVerificationService({table.get('B').address: VerificationError("bad")})
        listener = RecordingListener()

        VerificationOrchestrator(service, listener).run_batch(table)

        assert listener.events == [
            ('start', 'A'),
            ('outcome', 'A', OutcomeKind.VERIFIED),
            ('start', 'B'),
            ('outcome', 'B', OutcomeKind.FAILED),
        ]

    def test_failing_listener_does_not_abort_batch(self):
        """Test that progress output errors never stop verification."""
        table = make_table('A', 'B', 'C')
        service = StubVerificationService({table.get('B').address: VerificationError("bad")})

        report = VerificationOrchestrator(service, BrokenListener()).run_batch(table)

        assert len(service.calls) == 3
        assert [name for name, _ in report.entries] == ['A', 'B', 'C']
        assert report.outcome_for('B') == VerificationOutcome.failed("bad")
        assert report.is_finalized

    def test_console_without_emoji_support(self):
        """Test a console reporter writing to a stream that cannot encode emoji."""
        table = make_table('A', 'B')
        service = StubVerificationService()
        stream = io.TextIOWrapper(io.BytesIO(), encoding='cp1252')
        reporter = ConsoleReporter(get_network('base-sepolia'), stream)

        report = VerificationOrchestrator(service, reporter).run_batch(table)

        assert len(service.calls) == 2
        assert report.counts()[OutcomeKind.VERIFIED] == 2


class TestConsoleReporter:
    """Test cases for the console report."""

    def test_report_lines(self):
        table = make_table('A', 'B', 'C')
        service = StubVerificationService({
            table.get('B').address: VerificationError("Already Verified"),
            table.get('C').address: VerificationError("Constructor arguments mismatch"),
        })
        stream = io.StringIO()
        reporter = ConsoleReporter(get_network('base-sepolia'), stream)

        reporter.on_begin()
        report = VerificationOrchestrator(service, reporter).run_batch(table)
        reporter.render_summary(report, table)
        output = stream.getvalue()

        assert "Verifying contracts on Base Sepolia" in output
        assert "📝 Verifying A..." in output
        assert f"   Address: {table.get('A').address}" in output
        assert f'   Args: ["{make_address(100)}"]' in output
        assert "✅ A verified successfully!" in output
        assert "ℹ️  B is already verified" in output
        assert "❌ Error verifying C:\n   Constructor arguments mismatch" in output
        assert "3 contracts: 1 verified, 1 already verified, 1 failed" in output
        for descriptor in table:
            assert f"   {descriptor.name}: https://sepolia.basescan.org/address/{descriptor.address}" in output

    def test_render_json(self):
        import json

        table = make_table('A')
        report = VerificationOrchestrator(StubVerificationService()).run_batch(table)
        stream = io.StringIO()

        ConsoleReporter(get_network('mainnet'), stream).render_json(report, table)
        document = json.loads(stream.getvalue())

        assert document['network'] == 'mainnet'
        assert document['total'] == 1
        assert document['summary'] == {'verified': 1, 'already_verified': 0, 'failed': 0}
        assert document['results'][0]['url'] == f"https://etherscan.io/address/{make_address(1)}"
