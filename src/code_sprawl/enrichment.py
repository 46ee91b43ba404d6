"""Optional LOC breakdown from the external ``cloc`` tool.

Best effort only: any failure is logged and yields None. The core scores
never depend on it.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path
from typing import Any, Iterable, Optional

from .logging_config import get_logger

logger = get_logger(__name__)


def count_lines(
    root: Path,
    exclude_dirs: Iterable[str] = (),
    timeout: int = 120,
    executable: str = "cloc",
) -> Optional[dict[str, Any]]:
    """Run ``cloc --json`` over a tree.

    Returns:
        Parsed cloc report, or None when the tool is missing or fails
    """
    binary = shutil.which(executable)
    if binary is None:
        logger.warning(f"{executable} not found, continuing without LOC data")
        return None

    cmd = [binary, str(root), "--json", "--quiet"]
    exclude = ",".join(exclude_dirs)
    if exclude:
        cmd.append(f"--exclude-dir={exclude}")

    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning(f"{executable} timed out after {timeout}s, continuing without LOC data")
        return None
    except OSError as e:
        logger.warning(f"{executable} failed to start ({e}), continuing without LOC data")
        return None

    if proc.returncode != 0:
        logger.warning(
            f"{executable} exited with {proc.returncode}, continuing without LOC data"
        )
        return None

    try:
        data = json.loads(proc.stdout)
    except json.JSONDecodeError as e:
        logger.warning(f"{executable} produced invalid JSON ({e}), continuing without LOC data")
        return None

    if not isinstance(data, dict):
        logger.warning(f"{executable} produced unexpected output, continuing without LOC data")
        return None
    return data
