"""
ZMap result analyzer.
Classifies parsed records and estimates scan coverage.
"""

import logging
from typing import Any, Dict, Iterable, List, Union

from netzap.analysis.result_parser import ScanRecord

OPEN_CLASSIFICATIONS = frozenset({'synack', 'echoreply', 'udp'})

ICMP_SCAN_TYPES = frozenset({'icmp_echo', 'icmp_echoscan', 'ipv6_icmp_echo'})
UDP_SCAN_TYPES = frozenset({'udp'})


class ResultAnalyzer:
    """Turns parsed scan records into host results and summary counts"""

    def estimate_host_count(self, subnets: Union[str, Iterable[str]]) -> int:
        """
        Estimate how many addresses the given subnets cover

        Each 'a.b.c.d/p' entry counts 2**(32 - p) hosts; entries without a
        usable IPv4 prefix count as a single host.

        Args:
            subnets: Subnet string or iterable of subnet strings

        Returns:
            Estimated number of addresses
        """
        if isinstance(subnets, str):
            subnets = [subnets]

        total = 0
        for subnet in subnets:
            _, _, prefix = subnet.strip().partition('/')
            try:
                bits = int(prefix)
            except ValueError:
                total += 1
                continue

            if 0 <= bits <= 32:
                total += 2 ** (32 - bits)
            else:
                logging.debug(f"Prefix out of range in {subnet}, counting as one host")
                total += 1
        return total

    def get_protocol(self, scan_type: str) -> str:
        """Transport protocol probed by a scan type"""
        if scan_type in ICMP_SCAN_TYPES:
            return 'icmp'
        if scan_type in UDP_SCAN_TYPES:
            return 'udp'
        return 'tcp'

    def classify(self, records: List[ScanRecord], scan_type: str, default_port: int) -> List[Dict[str, Any]]:
        """
        Convert parsed records into host results

        Args:
            records: Records from the output parser
            scan_type: Scan type that produced the records
            default_port: Port used when a record has no usable 'dport'

        Returns:
            List of dictionaries with 'ip', 'port', 'protocol' and 'status'
        """
        protocol = self.get_protocol(scan_type)
        hosts = []
        for record in records:
            try:
                port = int(record.get('dport', ''))
            except ValueError:
                port = default_port

            hosts.append({
                'ip': record['saddr'],
                'port': port,
                'protocol': protocol,
                'status': 'open' if record.get('classification') in OPEN_CLASSIFICATIONS else 'closed',
            })
        return hosts

    def summarize(self, hosts: List[Dict[str, Any]], subnets: Union[str, Iterable[str]]) -> Dict[str, int]:
        """Summary counts for a finished scan"""
        return {
            'hosts_scanned': self.estimate_host_count(subnets),
            'hosts_up': len(hosts),
            'open': sum(1 for host in hosts if host['status'] == 'open'),
        }
