"""
Shared fixtures for the NetZap tests.
"""

import pytest

from netzap.scanning.base_executor import CommandExecutor, ExecutionResult


class FakeExecutor(CommandExecutor):
    """Records every call and replies with canned results keyed by the first argument"""

    def __init__(self, default=None, responses=None):
        self.default = default or ExecutionResult(success=True, output='', exit_code=0)
        self.responses = responses or {}
        self.calls = []

    async def run(self, executable_path, args):
        self.calls.append((executable_path, list(args)))
        key = args[0] if args else None
        return self.responses.get(key, self.default)


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def config_file(tmp_path):
    """Write a configuration file and return its path"""
    def write(content: str) -> str:
        path = tmp_path / "netzap.conf"
        path.write_text(content, encoding="utf-8")
        return str(path)
    return write
