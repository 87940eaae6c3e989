"""Subprocess helpers."""

import logging
import subprocess
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


def run_cmd(
    cmd: List[str],
    timeout_s: float = 5.0,
    env: Optional[Dict[str, str]] = None
) -> Tuple[int, str, str]:
    """Run a command and capture its output.

    Args:
        cmd: Command and arguments
        timeout_s: Seconds before the process is killed
        env: Environment for the child (inherit when None)

    Returns:
        Tuple of (return code, stdout, stderr). Trailing whitespace is
        removed; leading whitespace on the first line is kept.

    Raises:
        subprocess.TimeoutExpired: If the command runs too long
        OSError: If the executable cannot be started
    """
    logger.debug(f"Running: {cmd}")

    p = subprocess.run(
        cmd,
        text=True,
        capture_output=True,
        timeout=timeout_s,
        env=env,
    )

    return p.returncode, (p.stdout or "").rstrip(), (p.stderr or "").rstrip()
