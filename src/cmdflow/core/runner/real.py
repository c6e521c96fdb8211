"""Production PipelineRunner using asyncio subprocesses.

Stages are spawned with asyncio.create_subprocess_exec (never through a shell)
and connected with OS pipes. Only the terminal stage's output is collected.
"""

import asyncio
import contextlib
import logging
import os
import subprocess
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import IO, Any

from cmdflow.core.command import Command, render_command_string
from cmdflow.core.result import ExecutionResult
from cmdflow.core.runner.abc import PipelineRunner
from cmdflow.errors import CommandCancelledError, CommandResolutionError

logger = logging.getLogger(__name__)

StreamTarget = int | IO[Any] | None


class AsyncioPipelineRunner(PipelineRunner):
    """Production implementation spawning real OS processes."""

    async def run(
        self,
        stages: Sequence[Command],
        cancel: asyncio.Event | None = None,
    ) -> ExecutionResult:
        return await self._run(stages, cancel, interactive=False, capture_stdout=True)

    async def run_interactive(
        self,
        stages: Sequence[Command],
        *,
        capture_stdout: bool,
        cancel: asyncio.Event | None = None,
    ) -> ExecutionResult:
        return await self._run(stages, cancel, interactive=True, capture_stdout=capture_stdout)

    async def _run(
        self,
        stages: Sequence[Command],
        cancel: asyncio.Event | None,
        *,
        interactive: bool,
        capture_stdout: bool,
    ) -> ExecutionResult:
        if not stages:
            raise ValueError("A pipeline needs at least one stage")

        command = render_command_string(stages)
        if cancel is not None and cancel.is_set():
            logger.debug("Cancel requested before start: %s", command)
            raise CommandCancelledError(command)

        logger.debug("Running pipeline (%d stages): %s", len(stages), command)
        start_time = datetime.now(UTC)
        processes: list[asyncio.subprocess.Process] = []
        try:
            await self._spawn_stages(
                stages,
                processes,
                command,
                interactive=interactive,
                capture_stdout=capture_stdout,
            )
            stdout, stderr = await self._wait_for_completion(
                processes, stages[0].standard_input, command, cancel
            )
        finally:
            await _terminate(processes)

        exit_code = processes[-1].returncode
        assert exit_code is not None
        logger.debug("Pipeline exited with code %d: %s", exit_code, command)

        return ExecutionResult(
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            start_time=start_time,
            exit_time=datetime.now(UTC),
        )

    async def _spawn_stages(
        self,
        stages: Sequence[Command],
        processes: list[asyncio.subprocess.Process],
        command: str,
        *,
        interactive: bool,
        capture_stdout: bool,
    ) -> None:
        """Start every stage, appending each process to processes as it starts.

        The parent closes its copy of every pipe end once the child holding
        it has been spawned, so EOF propagates downstream when a stage exits.
        """
        last_index = len(stages) - 1
        upstream: int | None = None
        try:
            for index, stage in enumerate(stages):
                is_last = index == last_index
                downstream_read: int | None = None
                downstream_write: int | None = None
                if not is_last:
                    downstream_read, downstream_write = os.pipe()

                stdin: StreamTarget
                if index > 0:
                    # Upstream output always wins over a stage's own standard input
                    stdin = upstream
                elif stage.standard_input is not None:
                    stdin = subprocess.PIPE
                elif interactive:
                    stdin = None
                else:
                    stdin = subprocess.DEVNULL

                stdout: StreamTarget
                stderr: StreamTarget
                if not is_last:
                    stdout = downstream_write
                    stderr = None if interactive else subprocess.DEVNULL
                else:
                    stdout = subprocess.PIPE if capture_stdout else None
                    stderr = None if interactive else subprocess.PIPE

                try:
                    process = await self._start(stage, command, stdin, stdout, stderr)
                except BaseException:
                    _close_fds(downstream_read)
                    raise
                finally:
                    _close_fds(upstream, downstream_write)
                    upstream = None

                processes.append(process)
                upstream = downstream_read
        finally:
            _close_fds(upstream)

    async def _start(
        self,
        stage: Command,
        command: str,
        stdin: StreamTarget,
        stdout: StreamTarget,
        stderr: StreamTarget,
    ) -> asyncio.subprocess.Process:
        try:
            process = await asyncio.create_subprocess_exec(
                stage.executable,
                *stage.arguments,
                cwd=stage.options.working_directory,
                env=stage.options.build_environment(os.environ),
                stdin=stdin,
                stdout=stdout,
                stderr=stderr,
            )
        except OSError as e:
            logger.debug("Failed to start %s: %s", stage.executable, e)
            raise CommandResolutionError(stage.executable, command, str(e)) from e

        logger.debug("Started %s (pid=%d)", stage.executable, process.pid)
        return process

    async def _wait_for_completion(
        self,
        processes: list[asyncio.subprocess.Process],
        standard_input: str | None,
        command: str,
        cancel: asyncio.Event | None,
    ) -> tuple[str, str]:
        collect = asyncio.ensure_future(_collect_output(processes, standard_input))
        if cancel is None:
            return await collect

        cancel_wait = asyncio.ensure_future(cancel.wait())
        try:
            done, _ = await asyncio.wait(
                {collect, cancel_wait}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            cancel_wait.cancel()
            if not collect.done():
                collect.cancel()
                await asyncio.wait({collect})

        if collect in done:
            return collect.result()

        logger.debug("Cancel requested while running: %s", command)
        raise CommandCancelledError(command)


async def _collect_output(
    processes: list[asyncio.subprocess.Process],
    standard_input: str | None,
) -> tuple[str, str]:
    terminal = processes[-1]
    stdout_bytes, stderr_bytes, _ = await asyncio.gather(
        _read_stream(terminal.stdout),
        _read_stream(terminal.stderr),
        _feed_stdin(processes[0], standard_input),
    )
    for process in processes:
        await process.wait()

    return (
        stdout_bytes.decode("utf-8", errors="replace"),
        stderr_bytes.decode("utf-8", errors="replace"),
    )


async def _read_stream(stream: asyncio.StreamReader | None) -> bytes:
    if stream is None:
        return b""
    return await stream.read()


async def _feed_stdin(process: asyncio.subprocess.Process, payload: str | None) -> None:
    writer = process.stdin
    if writer is None or payload is None:
        return
    try:
        writer.write(payload.encode("utf-8"))
        await writer.drain()
    except (BrokenPipeError, ConnectionResetError):
        # The process exited or closed stdin before consuming everything
        logger.debug("pid=%d closed stdin before reading all input", process.pid)
    finally:
        writer.close()


async def _terminate(processes: list[asyncio.subprocess.Process]) -> None:
    """Kill any stage still running and reap every stage."""
    for process in processes:
        if process.returncode is None:
            logger.debug("Killing pid=%d", process.pid)
            with contextlib.suppress(ProcessLookupError):
                process.kill()
    for process in processes:
        await process.wait()


def _close_fds(*fds: int | None) -> None:
    for fd in fds:
        if fd is not None:
            os.close(fd)
