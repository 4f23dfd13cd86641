"""Spawning the interactive shell and cleaning up after it."""

import logging
import os
import signal
import subprocess
from typing import Mapping

from assumeshell.errors import SpawnError

logger = logging.getLogger(__name__)

_FORWARDED_SIGNALS = (signal.SIGINT, signal.SIGQUIT)


def _ignore(signum, frame):
    pass


def run_shell(cwd: str | None = None, environ: Mapping[str, str] = os.environ) -> int:
    """Start ``$SHELL`` attached to this terminal and wait for it to exit.

    The child inherits stdin/stdout/stderr and ``environ``. Returns the
    shell's exit status.
    """
    shell = environ.get("SHELL", "")
    if not shell:
        raise SpawnError("SHELL is not set; cannot start an interactive shell")

    if cwd is None:
        cwd = os.getcwd()

    logger.debug("Starting %s in %s", shell, cwd)
    try:
        proc = subprocess.Popen([shell], cwd=cwd, env=dict(environ))
    except OSError as e:
        raise SpawnError(f"Cannot start shell {shell}: {e.strerror or e}")

    # Ctrl-C / Ctrl-\ belong to the child shell. A no-op handler (rather than
    # SIG_IGN) is reset on exec, so later children still see the default.
    previous = {sig: signal.signal(sig, _ignore) for sig in _FORWARDED_SIGNALS}
    try:
        returncode = proc.wait()
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    logger.debug("%s exited with status %d", shell, returncode)
    return returncode


def terminate_launcher() -> None:
    """Kill the process that launched this tool.

    assumeshell is meant to replace the calling shell (``exec assumeshell``
    or a key binding). Once the spawned shell exits, the launcher is killed
    so the user is not dropped back into a stale shell underneath.
    """
    ppid = os.getppid()
    if ppid <= 1:
        logger.debug("Parent is init, nothing to terminate")
        return
    try:
        os.kill(ppid, signal.SIGKILL)
    except OSError as e:
        logger.debug("Could not terminate parent process %d: %s", ppid, e)
