"""
Command execution abstraction for the kubectl calls made during discovery.
"""

import subprocess
import logging
from typing import Optional, List, Any

from kubemap.output import get_output

logger = logging.getLogger(__name__)


class CommandExecutor:
    """
    Runs external commands with consistent logging and error reporting.

    Discovery goes through an executor so tests can swap in a mock instead
    of a real kubectl.
    """

    def __init__(self, check: bool = True, capture_output: bool = True, text: bool = True):
        """
        Initialize the command executor.

        Args:
            check: If True, raise CalledProcessError on non-zero exit codes
            capture_output: If True, capture stdout and stderr
            text: If True, return strings instead of bytes
        """
        self.check = check
        self.capture_output = capture_output
        self.text = text

    def run(
        self,
        cmd: List[str],
        check: Optional[bool] = None,
        capture_output: Optional[bool] = None,
        **kwargs: Any,
    ) -> subprocess.CompletedProcess:
        """
        Execute a command and return the result.

        Args:
            cmd: Command to execute as a list of strings
            check: Override default check behavior
            capture_output: Override default capture_output behavior
            **kwargs: Additional arguments to pass to subprocess.run

        Returns:
            CompletedProcess instance with stdout, stderr, and returncode

        Raises:
            subprocess.CalledProcessError: If check=True and command fails
            FileNotFoundError: If command executable is not found
        """
        check = check if check is not None else self.check
        capture_output = capture_output if capture_output is not None else self.capture_output
        output = get_output()

        logger.debug(f"Executing command: {' '.join(cmd)}")
        output.verbose(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                check=check,
                capture_output=capture_output,
                text=self.text,
                **kwargs,
            )
        except subprocess.CalledProcessError as e:
            logger.error(f"Command failed: {' '.join(cmd)} (return code {e.returncode})")
            if e.stderr:
                logger.error(f"Stderr: {e.stderr}")
                output.verbose(f"Stderr: {e.stderr}")
            raise
        except FileNotFoundError:
            logger.error(f"Command not found: {cmd[0]}")
            output.error(
                f"Command not found: {cmd[0]}",
                suggestion=f"Ensure {cmd[0]} is installed and available in your PATH, or set KUBECTL_BINARY",
            )
            raise

        logger.debug(f"Command completed with return code: {result.returncode}")
        if result.stdout:
            output.verbose(f"Received {len(result.stdout)} bytes")
        return result


# Default executor instance for convenience
_default_executor = CommandExecutor()


def get_executor() -> CommandExecutor:
    """
    Get the default command executor instance.

    Returns:
        Default CommandExecutor instance
    """
    return _default_executor
