"""
Compiles a ScanConfiguration into ZMap command-line arguments.
"""

import json
import shlex
from collections.abc import Mapping
from typing import List, Sequence

from netzap.config.options import ScanOption, option_to_flag
from netzap.core.scan_config import ScanConfiguration


def build_command(config: ScanConfiguration) -> List[str]:
    """
    Build the ZMap argument list for a configuration

    Options are emitted in insertion order. Subnets always come last,
    one positional argument per subnet.

    Args:
        config: Scan configuration

    Returns:
        List of command-line tokens, without the executable
    """
    args: List[str] = []

    for key, value in config.items():
        if key == ScanOption.SUBNET.key:
            continue

        flag = option_to_flag(key)

        if key == ScanOption.OUTPUT_FIELDS.key:
            if isinstance(value, (list, tuple)):
                value = ','.join(value)
            args.extend([flag, value])
            continue

        if key == ScanOption.USER_METADATA.key and isinstance(value, Mapping):
            args.extend([flag, json.dumps(value)])
            continue

        if isinstance(value, bool):
            if value:
                args.append(flag)
        elif isinstance(value, (list, tuple)):
            args.extend([flag, ','.join(str(item) for item in value)])
        elif isinstance(value, Mapping):
            args.extend([flag, json.dumps(value)])
        else:
            args.extend([flag, str(value)])

    args.extend(config.subnets)
    return args


def build_invocation(executable_path: str, config: ScanConfiguration) -> List[str]:
    """Full command line: executable followed by the compiled arguments"""
    return [executable_path] + build_command(config)


def format_command(tokens: Sequence[str]) -> str:
    """Render a token list as a shell-quoted string for logging"""
    return ' '.join(shlex.quote(token) for token in tokens)
