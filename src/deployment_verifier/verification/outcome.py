"""
Verification Outcome Module

Outcome of a single verification attempt and the batch report that collects
one outcome per contract.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class OutcomeKind(Enum):
    VERIFIED = "verified"
    ALREADY_VERIFIED = "already_verified"
    FAILED = "failed"


class VerificationOutcome:
    """Tagged result of one verification attempt.

    ``reason`` is set only for FAILED outcomes and holds the service message
    verbatim.
    """

    __slots__ = ('kind', 'reason')

    def __init__(self, kind: OutcomeKind, reason: Optional[str] = None):
        if (kind is OutcomeKind.FAILED) != (reason is not None):
            raise ValueError("reason is required for FAILED outcomes and only for them")
        self.kind = kind
        self.reason = reason

    @classmethod
    def verified(cls) -> 'VerificationOutcome':
        return cls(OutcomeKind.VERIFIED)

    @classmethod
    def already_verified(cls) -> 'VerificationOutcome':
        return cls(OutcomeKind.ALREADY_VERIFIED)

    @classmethod
    def failed(cls, reason: str) -> 'VerificationOutcome':
        return cls(OutcomeKind.FAILED, reason)

    @property
    def is_failure(self) -> bool:
        return self.kind is OutcomeKind.FAILED

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VerificationOutcome):
            return NotImplemented
        return self.kind is other.kind and self.reason == other.reason

    def __hash__(self) -> int:
        return hash((self.kind, self.reason))

    def __repr__(self) -> str:
        if self.reason is None:
            return f"VerificationOutcome({self.kind.name})"
        return f"VerificationOutcome({self.kind.name}, {self.reason!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert outcome to dictionary format."""
        result: Dict[str, Any] = {'status': self.kind.value}
        if self.reason is not None:
            result['reason'] = self.reason
        return result


class BatchReport:
    """Append-only record of outcomes for one batch run, in table order."""

    def __init__(self):
        self._entries: List[Tuple[str, VerificationOutcome]] = []
        self._finalized = False

    def record(self, name: str, outcome: VerificationOutcome) -> None:
        """Append the outcome for ``name``."""
        if self._finalized:
            raise RuntimeError("Batch report is finalized")
        self._entries.append((name, outcome))

    def finalize(self) -> 'BatchReport':
        """Mark the report read-only once the last contract is processed."""
        self._finalized = True
        return self

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    @property
    def entries(self) -> Tuple[Tuple[str, VerificationOutcome], ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def outcome_for(self, name: str) -> Optional[VerificationOutcome]:
        for entry_name, outcome in self._entries:
            if entry_name == name:
                return outcome
        return None

    def counts(self) -> Dict[OutcomeKind, int]:
        """Number of outcomes per kind; every kind is present."""
        totals = {kind: 0 for kind in OutcomeKind}
        for _, outcome in self._entries:
            totals[outcome.kind] += 1
        return totals

    def failed(self) -> List[Tuple[str, str]]:
        """(name, reason) for every failed contract."""
        return [(name, outcome.reason) for name, outcome in self._entries if outcome.is_failure]

    def to_dict(self) -> Dict[str, Any]:
        """Convert report to dictionary format."""
        return {
            'results': [
                {'name': name, **outcome.to_dict()}
                for name, outcome in self._entries
            ],
            'summary': {kind.value: count for kind, count in self.counts().items()},
            'total': len(self._entries)
        }
