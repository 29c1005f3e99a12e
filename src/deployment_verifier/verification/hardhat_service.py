"""
Hardhat Verification Service

Delegates verification to the ``hardhat verify`` task of the project that
deployed the contracts. Hardhat compiles the sources itself and talks to the
explorer configured for the selected network.
"""

import logging
import subprocess
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Union

from ..errors import VerificationError
from .classification import mentions_already_verified
from .service import VerificationService

logger = logging.getLogger(__name__)


def format_cli_argument(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def _output_lines(text: Optional[str]) -> List[str]:
    return [line.strip() for line in (text or '').splitlines() if line.strip()]


class HardhatVerificationService(VerificationService):
    """Verification backend running ``npx hardhat verify``."""

    def __init__(self,
                 network: str,
                 project_root: Union[str, Path] = ".",
                 command: Optional[Sequence[str]] = None,
                 timeout: Optional[float] = None,
                 run_process: Callable[..., subprocess.CompletedProcess] = subprocess.run):
        """
        Initialize the Hardhat service.

        Args:
            network: Hardhat network name to verify on
            project_root: Directory holding ``hardhat.config.*``
            command: Command prefix used to invoke Hardhat
            timeout: Optional timeout per verification, in seconds
            run_process: Process runner, replaceable for tests
        """
        self.network = network
        self.project_root = Path(project_root)
        self.command = list(command or ['npx', 'hardhat'])
        self.timeout = timeout
        self.run_process = run_process

    def build_command(self, address: str, constructor_args: Sequence[Any], source_ref: str) -> List[str]:
        return [
            *self.command,
            'verify',
            '--network', self.network,
            '--contract', source_ref,
            address,
            *[format_cli_argument(arg) for arg in constructor_args],
        ]

    def verify(self, address: str, constructor_args: Sequence[Any], source_ref: str) -> None:
        cmd = self.build_command(address, constructor_args, source_ref)
        logger.debug("Running %s", ' '.join(cmd))

        try:
            completed = self.run_process(
                cmd,
                cwd=self.project_root,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise VerificationError(f"hardhat verify timed out after {e.timeout} seconds") from e
        except OSError as e:
            raise VerificationError(f"Cannot run {self.command[0]}: {e}") from e

        stdout_lines = _output_lines(completed.stdout)
        stderr_lines = _output_lines(completed.stderr)

        if completed.returncode != 0:
            lines = stderr_lines or stdout_lines
            message = '\n'.join(lines) if lines else f"hardhat verify exited with code {completed.returncode}"
            raise VerificationError(message)

        # Hardhat reports an already verified contract with a zero exit code
        for line in stdout_lines:
            if mentions_already_verified(line):
                raise VerificationError(line)
