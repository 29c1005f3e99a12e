"""
Artifact Table Module

Static, ordered tables of deployed contracts awaiting verification.
"""

from .descriptor import ArtifactDescriptor, ArtifactTable, build_table
from .loader import LoadedTable, load_table_file, parse_table
from .defaults import DEFAULT_NETWORK, default_table

__all__ = [
    'ArtifactDescriptor',
    'ArtifactTable',
    'build_table',
    'LoadedTable',
    'load_table_file',
    'parse_table',
    'DEFAULT_NETWORK',
    'default_table',
]
