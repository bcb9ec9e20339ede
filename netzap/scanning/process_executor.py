"""
Command executors backed by real processes, and a stand-in for hosts
where processes cannot be started.
"""

import asyncio
import logging
from typing import List, Optional

from netzap.scanning.base_executor import CommandExecutor, ExecutionResult
from netzap.scanning.command_builder import format_command

UNAVAILABLE_MESSAGE = 'Command execution is not supported in this environment'


class ProcessExecutor(CommandExecutor):
    """Runs commands as local subprocesses"""

    def __init__(self, timeout: Optional[float] = None):
        """
        Args:
            timeout: Seconds to wait before killing the process, None to wait indefinitely
        """
        self.timeout = timeout

    @staticmethod
    async def _kill(process: asyncio.subprocess.Process) -> None:
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()

    async def run(self, executable_path: str, args: List[str]) -> ExecutionResult:
        cmd = [executable_path] + list(args)
        logging.debug(f"Command: {format_command(cmd)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            logging.error(f"Unable to start {executable_path}: {e}")
            return ExecutionResult(
                success=False,
                error=f"Unable to start {executable_path}: {e}",
                available=False
            )

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            await self._kill(process)
            logging.error(f"{executable_path} timed out after {self.timeout}s")
            return ExecutionResult(
                success=False,
                error=f"Timed out after {self.timeout}s",
                exit_code=process.returncode
            )
        except asyncio.CancelledError:
            # Cancelled by the caller, e.g. an outer wait_for; the child must not outlive it
            await self._kill(process)
            logging.warning(f"{executable_path} cancelled, process killed")
            raise

        stdout_text = stdout.decode(errors='replace') if stdout else ''
        stderr_text = stderr.decode(errors='replace').strip() if stderr else ''

        if process.returncode != 0:
            logging.error(f"{executable_path} failed with return code {process.returncode}")
            if stderr_text:
                logging.error(f"STDERR: {stderr_text}")
            return ExecutionResult(
                success=False,
                output=stdout_text,
                error=stderr_text or 'Unknown error',
                exit_code=process.returncode
            )

        return ExecutionResult(success=True, output=stdout_text, exit_code=process.returncode)


class UnavailableExecutor(CommandExecutor):
    """Executor for hosts that cannot run ZMap; every call fails uniformly"""

    def __init__(self, message: str = UNAVAILABLE_MESSAGE):
        self.message = message

    async def run(self, executable_path: str, args: List[str]) -> ExecutionResult:
        logging.warning(f"Not running {executable_path}: {self.message}")
        return ExecutionResult(success=False, error=self.message, exit_code=1, available=False)
