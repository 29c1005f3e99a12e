"""
Build Info Store

Looks up compiler metadata for a contract in Hardhat build-info files
(``artifacts/build-info/*.json``). Explorer APIs need the exact compiler
version, the standard JSON input and the contract ABI to reproduce bytecode.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..errors import VerificationError

logger = logging.getLogger(__name__)

BUILD_INFO_DIR = Path("artifacts") / "build-info"


class CompilerInput:
    """Compiler metadata for one contract."""

    def __init__(self,
                 source_ref: str,
                 solc_long_version: str,
                 standard_json_input: Dict[str, Any],
                 abi: List[Dict[str, Any]]):
        self.source_ref = source_ref
        self.solc_long_version = solc_long_version
        self.standard_json_input = standard_json_input
        self.abi = abi

    @property
    def compiler_version(self) -> str:
        """Version string in the ``v0.8.20+commit.a1b79de6`` form explorers expect."""
        return f"v{self.solc_long_version}"

    def constructor_input_types(self) -> List[str]:
        for item in self.abi:
            if item.get('type') == 'constructor':
                return [param['type'] for param in item.get('inputs', [])]
        return []


def split_source_ref(source_ref: str) -> Tuple[str, str]:
    source_name, _, contract_name = source_ref.rpartition(':')
    if not source_name or not contract_name:
        raise VerificationError(f"Invalid source reference: {source_ref}")
    return source_name, contract_name


class BuildInfoStore:
    """Index of Hardhat build-info files under a project root."""

    def __init__(self, project_root: Union[str, Path] = "."):
        self.build_info_dir = Path(project_root) / BUILD_INFO_DIR
        self._index: Optional[Dict[Tuple[str, str], Path]] = None

    def _build_index(self) -> Dict[Tuple[str, str], Path]:
        index: Dict[Tuple[str, str], Path] = {}
        if not self.build_info_dir.is_dir():
            logger.warning("Build info directory not found: %s", self.build_info_dir)
            return index

        # Newest files win when a contract appears in several builds
        files = sorted(self.build_info_dir.glob("*.json"), key=lambda p: p.stat().st_mtime)
        for path in files:
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    build_info = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Skipping unreadable build info %s: %s", path, e)
                continue

            if not isinstance(build_info, dict):
                logger.warning("Skipping build info %s: not a JSON object", path)
                continue

            contracts = build_info.get('output', {}).get('contracts', {})
            for source_name, by_name in contracts.items():
                for contract_name in by_name:
                    index[(source_name, contract_name)] = path

        logger.debug("Indexed %d contracts from %s", len(index), self.build_info_dir)
        return index

    def lookup(self, source_ref: str) -> CompilerInput:
        """
        Return compiler metadata for a fully-qualified source reference.

        Raises:
            VerificationError: if no build-info file contains the contract,
                or the file holding it cannot be read or lacks a required field
        """
        if self._index is None:
            self._index = self._build_index()

        key = split_source_ref(source_ref)
        path = self._index.get(key)
        if path is None:
            raise VerificationError(
                f"No build info found for {source_ref} in {self.build_info_dir}; compile the project first"
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                build_info = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise VerificationError(f"Cannot read build info {path}: {e}") from e

        source_name, contract_name = key
        try:
            contract = build_info['output']['contracts'][source_name][contract_name]
            return CompilerInput(
                source_ref=source_ref,
                solc_long_version=build_info['solcLongVersion'],
                standard_json_input=build_info['input'],
                abi=contract.get('abi', [])
            )
        except KeyError as e:
            raise VerificationError(f"Build info {path} is missing field {e.args[0]!r}") from e
