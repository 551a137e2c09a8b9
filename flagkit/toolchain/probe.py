"""
flagkit/toolchain/probe.py

Compiler interrogation - runs an executable once and returns its text output.
"""

import logging
import subprocess
from typing import Sequence

from ..core.exceptions import ProbeFailed

logger = logging.getLogger(__name__)


class ProcessProbe:
    """
    Run an external executable synchronously and capture its output.

    This is the only place FlagKit spawns processes. A non-zero exit status
    is not treated as a failure: compilers such as cl.exe print their banner
    and exit non-zero when given no input, so the caller decides whether the
    text is recognizable.
    """

    def __init__(self, timeout: float = 5):
        self.timeout = timeout

    def probe(self, executable: str, args: Sequence[str] = ()) -> str:
        """
        Invoke executable with args and return stdout and stderr combined.

        Args:
            executable: Path or name of the executable
            args: Arguments (e.g., ['-dumpversion'])

        Returns:
            Stripped output text

        Raises:
            ProbeFailed: If the executable cannot be invoked, times out or
                prints nothing
        """
        command = [str(executable), *args]
        logger.debug(f"Probing: {' '.join(command)}")

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired:
            raise ProbeFailed(str(executable), f"timed out after {self.timeout}s")
        except OSError as e:
            raise ProbeFailed(str(executable), str(e))

        output = ((result.stdout or "") + (result.stderr or "")).strip()
        if not output:
            raise ProbeFailed(
                str(executable), f"no output (exit code {result.returncode})"
            )

        logger.debug(f"Probe output ({result.returncode}): {output[:200]}")
        return output
