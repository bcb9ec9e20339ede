"""
NetZap - build ZMap command lines, run scans and parse the results.
"""

__version__ = '0.3.0'

from netzap.analysis.result_parser import ResultParser, parse_address_list, parse_output
from netzap.config.options import ScanOption, ScanType, TemplateField, camel_to_kebab
from netzap.core.scan_config import ScanConfiguration
from netzap.errors import (
    IntrospectionError,
    IntrospectionUnavailableError,
    InvalidScanRequestError,
    ScanExecutionError,
    ToolUnavailableError,
    ZMapError,
)
from netzap.scanning.base_executor import CommandExecutor, ExecutionResult
from netzap.scanning.command_builder import build_command
from netzap.scanning.probe_args import ProbeArgType, format_probe_args
from netzap.scanning.process_executor import ProcessExecutor, UnavailableExecutor
from netzap.scanning.zmap_scanner import ZMapScanner

__all__ = [
    'CommandExecutor',
    'ExecutionResult',
    'IntrospectionError',
    'IntrospectionUnavailableError',
    'InvalidScanRequestError',
    'ProbeArgType',
    'ProcessExecutor',
    'ResultParser',
    'ScanConfiguration',
    'ScanExecutionError',
    'ScanOption',
    'ScanType',
    'TemplateField',
    'ToolUnavailableError',
    'UnavailableExecutor',
    'ZMapError',
    'ZMapScanner',
    'build_command',
    'camel_to_kebab',
    'format_probe_args',
    'parse_address_list',
    'parse_output',
]
