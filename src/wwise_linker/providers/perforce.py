"""
Perforce checkout through the p4 command line.

Checkout is fire-and-forget: the exit status is logged for diagnosis but
never reported back to the render task.
"""

import subprocess
from typing import List, Optional

from loguru import logger

from wwise_linker.core.config import PerforceConfig
from wwise_linker.core.output import log


class PerforceClient:
    """Opens files for edit with ``p4 edit``."""

    def __init__(self, config: Optional[PerforceConfig] = None, timeout: float = 60.0):
        self.config = config or PerforceConfig()
        self.timeout = timeout

    def build_command(self, file_path: str) -> List[str]:
        command = [self.config.executable]
        if self.config.port:
            command += ["-p", self.config.port]
        if self.config.user:
            command += ["-u", self.config.user]
        if self.config.client:
            command += ["-c", self.config.client]
        command += ["edit", file_path]
        return command

    def checkout(self, file_path: str) -> None:
        command = self.build_command(file_path)
        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            log(f"p4 edit could not run for {file_path}: {e}", level="warning")
            return

        if result.returncode != 0:
            message = (result.stderr or result.stdout).strip()
            log(f"p4 edit returned {result.returncode} for {file_path}: {message}", level="warning")
        else:
            logger.debug(result.stdout.strip())


class NullVersionControl:
    """Used when Perforce is disabled; files are assumed writable."""

    def checkout(self, file_path: str) -> None:
        logger.debug(f"Version control disabled, not checking out {file_path}")


def create_version_control(config: PerforceConfig):
    """Return the version control client selected by ``config``."""
    if config.enabled:
        return PerforceClient(config)
    return NullVersionControl()
