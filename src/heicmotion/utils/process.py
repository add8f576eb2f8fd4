"""External process helpers."""

import logging
import subprocess

from heicmotion.models import CommandResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 120


def run_command(args: list[str], timeout: float | None = DEFAULT_TIMEOUT) -> CommandResult:
    """Run an external tool and capture its output.

    Never raises: a missing binary or OS error is reported as exit code -1
    with the error text in ``stderr``, and a timeout also sets ``timed_out``.

    Args:
        args: Command and arguments
        timeout: Seconds before the process is killed (None waits forever)

    Returns:
        CommandResult with exit code and captured output
    """
    logger.debug("exec: %s", " ".join(args))
    try:
        proc = subprocess.run(
            args,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return CommandResult(
            args=args,
            returncode=-1,
            stderr=f"{args[0]} timed out after {timeout}s",
            timed_out=True,
        )
    except OSError as e:
        return CommandResult(args=args, returncode=-1, stderr=str(e))

    return CommandResult(
        args=args,
        returncode=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
