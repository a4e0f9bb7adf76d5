"""External tool subprocess runner."""
from __future__ import annotations

import asyncio
import logging
import os
import signal
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from vidpub.domain.errors import ToolFailure

logger = logging.getLogger(__name__)

AddCommandCallback = Optional[Callable[[str, str, Optional[str]], Any]]
UpdateStatusCallback = Optional[Callable[[Any, str, Optional[str]], Any]]


@dataclass(frozen=True)
class ToolOutput:
    """Captured output of a finished tool run."""

    stdout: bytes
    stderr: bytes
    returncode: int

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode(errors="replace")

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode(errors="replace")


def _kill_process_tree(process: asyncio.subprocess.Process) -> None:
    """Kill the child and everything it spawned (it leads its own session).

    The group is signalled even when the child itself has already exited:
    a descendant holding the pipes open is what keeps ``communicate`` waiting.
    """
    try:
        if hasattr(os, "killpg"):
            os.killpg(process.pid, signal.SIGKILL)
        elif process.returncode is None:
            process.kill()
    except ProcessLookupError:
        pass


async def run_tool_command(
    cmd: Sequence[str],
    *,
    timeout: float,
    command_type: str,
    error_prefix: str,
    source_file: Optional[str] = None,
    add_command_callback: AddCommandCallback = None,
    update_status_callback: UpdateStatusCallback = None,
    timeout_message: Optional[str] = None,
) -> ToolOutput:
    """
    Run an external tool with an explicit argument vector (never via a shell).

    Stdout and stderr are drained concurrently so a chatty child cannot block
    on a full pipe. The whole process group is killed when the deadline
    passes.

    Args:
        cmd: Complete command arguments; cmd[0] is the executable.
        timeout: Deadline in seconds.
        command_type: Logical command type (e.g., "probe", "remux").
        error_prefix: Error message prefix for exceptions.
        source_file: Originating file for logging.
        add_command_callback: Optional callback to record the command.
        update_status_callback: Optional callback to update status.
        timeout_message: Override default timeout message.

    Returns:
        The captured output of a zero-exit run.

    Raises:
        ToolFailure: When the command cannot start, exits non-zero or times out.
    """
    cmd_id: Any = None
    if add_command_callback:
        cmd_id = add_command_callback(command_type, " ".join(cmd), source_file)

    def _report(status: str, error: Optional[str] = None) -> None:
        if update_status_callback and cmd_id is not None:
            update_status_callback(cmd_id, status, error)

    _report("running")
    logger.debug("Running %s: %s", command_type, list(cmd))

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=True,
        )
    except OSError as exc:
        _report("failed", str(exc))
        raise ToolFailure(f"{error_prefix}: could not start {cmd[0]}", stderr=str(exc)) from exc

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        _kill_process_tree(process)
        await process.wait()
        timeout_msg = timeout_message or f"{error_prefix}: timed out after {timeout}s"
        _report("failed", timeout_msg)
        logger.warning(f"{command_type} timed out ({source_file})")
        raise ToolFailure(timeout_msg)
    except asyncio.CancelledError:
        _kill_process_tree(process)
        await asyncio.shield(process.wait())
        raise

    output = ToolOutput(stdout=stdout, stderr=stderr, returncode=process.returncode)
    if output.returncode != 0:
        _report("failed", output.stderr_text)
        logger.warning(
            f"{command_type} exited with {output.returncode} ({source_file}): {output.stderr_text.strip()}"
        )
        raise ToolFailure(
            f"{error_prefix} (exit code {output.returncode})",
            stderr=output.stderr_text,
            returncode=output.returncode,
        )

    _report("completed")
    return output
