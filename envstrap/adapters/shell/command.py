"""
Shell installer — runs install actions as local processes.

This is the SINGLE PLACE where ``subprocess.run`` is called for
install operations.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import time

from envstrap.adapters.base import Installer
from envstrap.core.models.action import InstallAction, Receipt

logger = logging.getLogger(__name__)

# Keep receipts small; installers can be chatty.
_TAIL = 2000


class ShellInstaller(Installer):
    """Execute install actions and capture their output.

    ``argv`` actions are exec'd directly; ``shell`` actions go through
    ``sh -c`` (needed for ``curl ... | sh``). Environment overrides are
    merged over the current environment. No timeout unless the action
    sets one.
    """

    @property
    def name(self) -> str:
        return "shell"

    def is_available(self) -> bool:
        return shutil.which("sh") is not None

    def run(self, action: InstallAction) -> Receipt:
        command = action.command_text
        logger.info("CMD %s", command if action.shell else shlex.join(action.argv or []))

        env = os.environ.copy()
        env.update(action.env)

        start = time.monotonic()
        try:
            result = subprocess.run(
                action.shell if action.shell is not None else list(action.argv or []),
                shell=action.shell is not None,
                cwd=action.cwd,
                env=env,
                capture_output=True,
                text=True,
                timeout=action.timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                installer=self.name,
                action_id=action.id,
                error=f"Command timed out after {action.timeout}s",
                metadata={"command": command, "timeout": action.timeout},
            )
        except Exception as e:
            return Receipt.failure(
                installer=self.name,
                action_id=action.id,
                error=f"Command execution error: {e}",
                metadata={"command": command},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        stdout = (result.stdout or "").strip()[-_TAIL:]
        stderr = (result.stderr or "").strip()[-_TAIL:]
        if stdout:
            logger.debug("STDOUT %s", stdout)
        if stderr:
            logger.debug("STDERR %s", stderr)

        if result.returncode == 0:
            return Receipt.success(
                installer=self.name,
                action_id=action.id,
                output=stdout,
                duration_ms=elapsed_ms,
                metadata={"command": command, "return_code": 0, "stderr": stderr},
            )

        return Receipt.failure(
            installer=self.name,
            action_id=action.id,
            error=stderr or f"Command exited with code {result.returncode}",
            duration_ms=elapsed_ms,
            metadata={
                "command": command,
                "return_code": result.returncode,
                "stdout": stdout,
            },
        )
