"""
Artifact Descriptor Module

Immutable records describing deployed contracts awaiting verification, and the
ordered table that holds one batch of them.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..errors import FatalConfigurationError

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r'^0x[0-9a-fA-F]{40}$')
SOURCE_REF_PATTERN = re.compile(r'^[^:\s]+:[A-Za-z_$][A-Za-z0-9_$]*$')

# Constructor argument strings of the form "@Name" refer to another
# descriptor's address and are replaced while the table is built.
BACK_REFERENCE_PREFIX = '@'


@dataclass(frozen=True)
class ArtifactDescriptor:
    """One deployed contract and the metadata needed to verify it."""

    name: str
    address: str
    constructor_args: Tuple[Any, ...]
    source_ref: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert descriptor to dictionary format."""
        return {
            'name': self.name,
            'address': self.address,
            'constructor_args': list(self.constructor_args),
            'source_ref': self.source_ref
        }


class ArtifactTable:
    """Ordered, read-only sequence of artifact descriptors.

    Declaration order is verification order. Lookup by name exists for
    report rendering only.
    """

    def __init__(self, descriptors: Iterable[ArtifactDescriptor]):
        self._descriptors: Tuple[ArtifactDescriptor, ...] = tuple(descriptors)
        self._by_name: Dict[str, ArtifactDescriptor] = {}

        if not self._descriptors:
            raise FatalConfigurationError("Artifact table is empty")

        seen_addresses: Dict[str, str] = {}
        for descriptor in self._descriptors:
            if descriptor.name in self._by_name:
                raise FatalConfigurationError(f"Duplicate artifact name: {descriptor.name}")
            self._by_name[descriptor.name] = descriptor

            key = descriptor.address.lower()
            if key in seen_addresses:
                logger.warning(
                    "Artifacts %s and %s share address %s",
                    seen_addresses[key], descriptor.name, descriptor.address
                )
            else:
                seen_addresses[key] = descriptor.name

    def __iter__(self) -> Iterator[ArtifactDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Optional[ArtifactDescriptor]:
        """Return the descriptor registered under ``name``, if any."""
        return self._by_name.get(name)

    def names(self) -> List[str]:
        return [descriptor.name for descriptor in self._descriptors]


def build_table(entries: Sequence[Tuple[str, str, Sequence[Any], str]]) -> ArtifactTable:
    """
    Build an artifact table from literal entries.

    Args:
        entries: (name, address, constructor args, source reference) tuples in
            verification order. Arguments written as ``@Name`` are replaced by
            the address of the entry called ``Name``.

    Returns:
        Fully resolved ArtifactTable

    Raises:
        FatalConfigurationError: if an entry is malformed or a reference
            cannot be resolved
    """
    addresses: Dict[str, str] = {}
    for name, address, _, source_ref in entries:
        if not isinstance(name, str) or not name:
            raise FatalConfigurationError(f"Invalid artifact name: {name!r}")
        if not isinstance(address, str) or not ADDRESS_PATTERN.match(address):
            raise FatalConfigurationError(f"Invalid address for {name}: {address!r}")
        if not isinstance(source_ref, str) or not SOURCE_REF_PATTERN.match(source_ref):
            raise FatalConfigurationError(
                f"Invalid source reference for {name}: {source_ref!r} "
                "(expected 'path/File.sol:Contract')"
            )
        addresses.setdefault(name, address)

    descriptors = []
    for name, address, args, source_ref in entries:
        resolved = tuple(_resolve_argument(name, arg, addresses) for arg in args)
        descriptors.append(ArtifactDescriptor(
            name=name,
            address=address,
            constructor_args=resolved,
            source_ref=source_ref
        ))

    return ArtifactTable(descriptors)


def _resolve_argument(owner: str, value: Any, addresses: Dict[str, str]) -> Any:
    if isinstance(value, str) and value.startswith(BACK_REFERENCE_PREFIX):
        target = value[len(BACK_REFERENCE_PREFIX):]
        if target not in addresses:
            raise FatalConfigurationError(
                f"Constructor argument of {owner} references unknown artifact: {target}"
            )
        return addresses[target]
    if isinstance(value, (list, dict)):
        raise FatalConfigurationError(
            f"Constructor argument of {owner} must be a scalar value, got {type(value).__name__}"
        )
    return value
