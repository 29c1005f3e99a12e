#!/usr/bin/env python3
"""
Deployment Verifier Command Line Interface

Usage:
    deployment-verifier run [--table <file>] [--network <name>] [--backend hardhat|etherscan]
        [--hardhat-network <name>] [--project-root <dir>] [--hardhat-timeout <seconds>] [--json]
    deployment-verifier links [--table <file>] [--network <name>]

The run command exits 0 once every contract has been attempted, whatever the
individual outcomes. Configuration errors abort with exit code 1 before any
contract is submitted.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .artifact_table import DEFAULT_NETWORK, ArtifactTable, default_table, load_table_file
from .config import BACKENDS, Settings
from .errors import FatalConfigurationError
from .logging_config import configure_logging
from .networks import NetworkConfig, get_network
from .reporting import ConsoleReporter
from .verification import (
    BatchListener,
    BuildInfoStore,
    EtherscanVerificationService,
    HardhatVerificationService,
    VerificationOrchestrator,
    VerificationService,
)

logger = logging.getLogger("deployment_verifier")


def load_table(settings: Settings) -> Tuple[ArtifactTable, NetworkConfig]:
    """Load the artifact table and resolve the network to verify on."""
    if settings.table_path:
        loaded = load_table_file(settings.table_path)
        table, file_network = loaded.table, loaded.network
    else:
        table, file_network = default_table(), DEFAULT_NETWORK

    network = get_network(settings.network or file_network or DEFAULT_NETWORK)
    return table, network


def build_service(settings: Settings, network: NetworkConfig) -> VerificationService:
    """Create the verification backend selected in settings."""
    settings.validate()

    if settings.backend == 'etherscan':
        return EtherscanVerificationService(
            api_key=settings.etherscan_api_key,
            chain_id=network.chain_id,
            build_info=BuildInfoStore(settings.project_root),
            api_url=settings.etherscan_api_url,
            request_timeout=settings.request_timeout,
            poll_interval=settings.poll_interval,
            max_polls=settings.max_polls,
        )

    return HardhatVerificationService(
        network=settings.hardhat_network or network.name,
        project_root=settings.project_root,
        timeout=settings.hardhat_timeout,
    )


def cmd_run(args, settings: Settings) -> int:
    """Verify every contract in the table."""
    table, network = load_table(settings)
    service = build_service(settings, network)
    reporter = ConsoleReporter(network)

    logger.info("Verifying %d contracts on %s with %s backend", len(table), network.name, settings.backend)

    if args.json:
        orchestrator = VerificationOrchestrator(service, BatchListener())
        report = orchestrator.run_batch(table)
        reporter.render_json(report, table)
    else:
        reporter.on_begin()
        orchestrator = VerificationOrchestrator(service, reporter)
        report = orchestrator.run_batch(table)
        reporter.render_summary(report, table)

    return 0


def cmd_links(args, settings: Settings) -> int:
    """Print explorer links for every contract in the table."""
    table, network = load_table(settings)
    ConsoleReporter(network).render_links(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="deployment-verifier",
        description="Verify deployed contracts on a block explorer"
    )
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_table_options(sub):
        sub.add_argument("--table", help="Artifact table file (YAML or JSON)")
        sub.add_argument("--network", help="Network name, e.g. base-sepolia")

    run_parser = subparsers.add_parser("run", help="Verify all contracts in the table")
    add_table_options(run_parser)
    run_parser.add_argument("--backend", choices=BACKENDS, help="Verification backend")
    run_parser.add_argument("--hardhat-network", help="Hardhat network name if it differs from --network")
    run_parser.add_argument("--project-root", help="Hardhat project directory")
    run_parser.add_argument("--hardhat-timeout", type=float, help="Seconds before a hardhat verify run is aborted")
    run_parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    run_parser.set_defaults(func=cmd_run)

    links_parser = subparsers.add_parser("links", help="Print explorer links for the table")
    add_table_options(links_parser)
    links_parser.set_defaults(func=cmd_links)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env().override(
            table_path=args.table,
            network=args.network,
            backend=getattr(args, 'backend', None),
            hardhat_network=getattr(args, 'hardhat_network', None),
            project_root=getattr(args, 'project_root', None),
            hardhat_timeout=getattr(args, 'hardhat_timeout', None),
            log_level=args.log_level,
        )
        configure_logging(settings.log_level, settings.log_json)
        return args.func(args, settings)
    except FatalConfigurationError as e:
        if not logging.getLogger().handlers:
            configure_logging()
        logger.error("Configuration error: %s", e)
        return 1
    except Exception:
        if not logging.getLogger().handlers:
            configure_logging()
        logger.exception("Verification run aborted")
        return 1


if __name__ == "__main__":
    sys.exit(main())
