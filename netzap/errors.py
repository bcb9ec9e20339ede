"""
Exception types raised by the NetZap scanner wrapper.
"""

from typing import Optional


class ZMapError(Exception):
    """Base class for all scanner wrapper errors"""


class ToolUnavailableError(ZMapError):
    """The ZMap executable could not be located or started"""


class ScanExecutionError(ZMapError):
    """ZMap ran but reported a failure"""

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        self.exit_code = exit_code


class IntrospectionError(ZMapError):
    """A help, listing or version call to ZMap failed"""


class InvalidScanRequestError(ZMapError):
    """A scan request is missing required data or names an unsupported scan type"""


class IntrospectionUnavailableError(IntrospectionError, ToolUnavailableError):
    """A help, listing or version call failed because ZMap could not be started"""
