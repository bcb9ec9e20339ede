"""
Parser for ZMap text output.
Turns CSV-style result lines into one dictionary per responding host.
"""

import logging
from typing import Dict, List, Optional, Union

ScanRecord = Dict[str, str]

FALLBACK_CLASSIFICATION = 'synack'


def parse_output(output: str, fallback_port: Optional[Union[int, str]] = None) -> List[ScanRecord]:
    """
    Parse ZMap CSV output into records

    Each line is 'saddr,classification[,dport]'. Blank lines, '#' comment
    lines and lines with fewer than two columns are skipped.

    Args:
        output: Raw ZMap stdout
        fallback_port: When set, output that yields no CSV records but is
            not blank is re-read as a bare address list using this port

    Returns:
        List of records with 'saddr', 'classification' and optionally 'dport'
    """
    if not output or not output.strip():
        return []

    results = []
    for line in output.strip().split('\n'):
        if not line.strip() or line.startswith('#'):
            continue

        values = line.split(',')
        if len(values) < 2:
            continue

        row = {
            'saddr': values[0].strip(),
            'classification': values[1].strip(),
        }
        if len(values) >= 3:
            row['dport'] = values[2].strip()

        results.append(row)

    if not results and fallback_port is not None:
        logging.debug("No CSV records found, reading output as a bare address list")
        return parse_address_list(output, fallback_port)

    return results


def parse_address_list(output: str, default_port: Union[int, str] = 80) -> List[ScanRecord]:
    """
    Parse output that contains one address per line

    Args:
        output: Raw ZMap stdout
        default_port: Port recorded for every address

    Returns:
        One 'synack' record per non-blank line
    """
    if not output or not output.strip():
        return []

    return [
        {
            'saddr': line.strip(),
            'dport': str(default_port),
            'classification': FALLBACK_CLASSIFICATION,
        }
        for line in output.strip().split('\n')
        if line.strip()
    ]


class ResultParser:
    """Parses ZMap output with a fixed fallback policy"""

    def __init__(self, fallback_port: Optional[Union[int, str]] = None):
        self.fallback_port = fallback_port

    def parse(self, output: str) -> List[ScanRecord]:
        """Parse output, applying the bare address fallback when configured"""
        records = parse_output(output, self.fallback_port)
        logging.info(f"Parsed {len(records)} records from scan output")
        return records
