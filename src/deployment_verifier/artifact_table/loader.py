"""
Artifact Table Loader

Reads artifact tables from YAML (or JSON) files. File contents are validated
with pydantic before the table is built, so every problem surfaces as a
FatalConfigurationError before verification starts.
"""

import logging
from collections.abc import Hashable
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr, ValidationError

from ..errors import FatalConfigurationError
from .descriptor import ArtifactTable, build_table

logger = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """Safe loader that rejects repeated keys instead of keeping the last value."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
            seen = set()
            for key_node, _ in node.value:
                key = self.construct_object(key_node, deep=deep)
                if not isinstance(key, Hashable):
                    continue
                if key in seen:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping", node.start_mark,
                        f"found duplicate key {key!r}", key_node.start_mark
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


class ContractEntry(BaseModel):
    model_config = ConfigDict(extra='forbid')

    address: StrictStr
    args: List[Union[StrictBool, StrictInt, StrictStr]] = []
    contract: StrictStr


class TableFile(BaseModel):
    model_config = ConfigDict(extra='forbid')

    network: Optional[StrictStr] = None
    contracts: Dict[StrictStr, ContractEntry]


class LoadedTable:
    """An artifact table together with the network its file names."""

    def __init__(self, table: ArtifactTable, network: Optional[str] = None, source: Optional[str] = None):
        self.table = table
        self.network = network
        self.source = source


def parse_table(data: object, source: str = "<memory>") -> LoadedTable:
    """
    Validate already-parsed table data and build the artifact table.

    Args:
        data: Mapping as produced by ``yaml.safe_load``
        source: Description of where the data came from, used in errors

    Returns:
        LoadedTable with the resolved table
    """
    try:
        parsed = TableFile.model_validate(data)
    except ValidationError as e:
        raise FatalConfigurationError(f"Invalid artifact table in {source}: {e}") from e

    entries = [
        (name, entry.address, entry.args, entry.contract)
        for name, entry in parsed.contracts.items()
    ]
    table = build_table(entries)
    logger.debug("Loaded %d artifacts from %s", len(table), source)

    return LoadedTable(table, network=parsed.network, source=source)


def load_table_file(path: Union[str, Path]) -> LoadedTable:
    """
    Load an artifact table from a YAML or JSON file.

    Addresses must be quoted in YAML; an unquoted ``0x...`` value is read as
    an integer and rejected. Repeated contract names are rejected as well.
    """
    table_path = Path(path)
    try:
        with open(table_path, 'r', encoding='utf-8') as f:
            data = yaml.load(f, Loader=UniqueKeyLoader)
    except OSError as e:
        raise FatalConfigurationError(f"Cannot read artifact table {table_path}: {e}") from e
    except yaml.YAMLError as e:
        raise FatalConfigurationError(f"Cannot parse artifact table {table_path}: {e}") from e

    return parse_table(data, source=str(table_path))
