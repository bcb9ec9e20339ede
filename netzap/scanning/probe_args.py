"""
Probe argument formatting for ZMap's UDP probe module.
"""

from enum import Enum
from typing import Union


class ProbeArgType(Enum):
    """Encodings accepted by the UDP probe payload argument"""
    TEXT = 'text'
    HEX = 'hex'
    FILE = 'file'


def format_probe_args(kind: Union[ProbeArgType, str], value: str) -> str:
    """
    Format a UDP probe payload for --probe-args

    The text form wraps the value in double quotes without escaping it.
    Unknown kinds return the value unchanged.

    Args:
        kind: Payload encoding (text, hex or file)
        value: Payload, hex string or file path

    Returns:
        Argument string such as 'hex deadbeef'
    """
    if isinstance(kind, ProbeArgType):
        kind = kind.value

    if kind == 'text':
        return f'text "{value}"'
    if kind == 'hex':
        return f"hex {value}"
    if kind == 'file':
        return f"file {value}"
    return value
