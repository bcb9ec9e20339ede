"""
Command executor interface for the NetZap scanner wrapper.
Defines the contract for running the ZMap executable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a single ZMap invocation"""
    success: bool
    output: str = ''
    exit_code: Optional[int] = None
    error: Optional[str] = None
    available: bool = True


class CommandExecutor(ABC):
    """Abstract base class for anything that can run the ZMap executable"""

    @abstractmethod
    async def run(self, executable_path: str, args: List[str]) -> ExecutionResult:
        """
        Run an executable with the given arguments

        Implementations must report failures through the returned result
        rather than raising.

        Args:
            executable_path: Path or name of the executable
            args: Command-line arguments

        Returns:
            ExecutionResult describing the outcome
        """
        pass
