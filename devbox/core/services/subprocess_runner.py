"""
Core subprocess runner.

The single place where ``subprocess.run`` is called.  Never raises:
every failure comes back as a result dict with an ``error_kind``.
"""

from __future__ import annotations

import logging
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)

# Callers read the first lines (version strings), so the head is kept.
_OUTPUT_LIMIT = 2000


def run_command(cmd: list[str], *, timeout: int = 15) -> dict[str, Any]:
    """Run a command and capture its output.

    Args:
        cmd: Command list for ``subprocess.run()``.
        timeout: Seconds before the command is killed.

    Returns:
        ``{"ok": True, "returncode": 0, "stdout": "...", "elapsed_ms": N}``
        on success, otherwise ``{"ok": False, "error_kind": ..., "error": ...}``
        where ``error_kind`` is one of ``not_found``, ``timeout``,
        ``exit_code`` or ``os_error``.
    """
    logger.debug("Running: %s", " ".join(cmd))
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        return {
            "ok": False,
            "error_kind": "not_found",
            "error": f"Command not found: {cmd[0]}",
        }
    except subprocess.TimeoutExpired:
        return {
            "ok": False,
            "error_kind": "timeout",
            "error": f"Command timed out ({timeout}s)",
        }
    except OSError as e:
        logger.warning("Subprocess error for %s: %s", cmd, e)
        return {"ok": False, "error_kind": "os_error", "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    stdout = result.stdout[:_OUTPUT_LIMIT] if result.stdout else ""
    stderr = result.stderr[:_OUTPUT_LIMIT] if result.stderr else ""

    if result.returncode == 0:
        return {
            "ok": True,
            "returncode": 0,
            "stdout": stdout,
            "stderr": stderr,
            "elapsed_ms": elapsed_ms,
        }

    return {
        "ok": False,
        "error_kind": "exit_code",
        "error": f"Command failed (exit {result.returncode})",
        "returncode": result.returncode,
        "stdout": stdout,
        "stderr": stderr,
        "elapsed_ms": elapsed_ms,
    }
