"""
Scan runner for the NetZap system.
Orchestrates availability checks, scan presets, execution, parsing,
analysis and notification for a single scan request.
"""

import asyncio
import functools
import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence, Union

from netzap.analysis.analyzer import ResultAnalyzer
from netzap.analysis.result_parser import parse_output
from netzap.config.configuration import ConfigManager
from netzap.config.options import ScanType
from netzap.errors import InvalidScanRequestError, ScanExecutionError, ToolUnavailableError
from netzap.notification.notification_manager import NotificationManager
from netzap.scanning.base_executor import CommandExecutor
from netzap.scanning.command_builder import format_command
from netzap.scanning.process_executor import ProcessExecutor
from netzap.scanning.zmap_scanner import ZMapScanner

SCAN_TYPES = ('tcp_synscan', 'icmp_echo', 'udp')


class ScanRunner:
    """Runs one ZMap scan request end to end"""

    def __init__(self, config: ConfigManager,
                 executor: Optional[CommandExecutor] = None,
                 notification_manager: Optional[NotificationManager] = None):
        """Initialize the runner with configuration and optional collaborators"""
        self.config = config
        self.executor = executor or ProcessExecutor(timeout=config.get_execution_timeout())
        self.analyzer = ResultAnalyzer()
        self.notification_manager = notification_manager or NotificationManager(config)
        self.scanner = ZMapScanner(
            config.get_scan_options(),
            executable_path=config.get_executable_path(),
            executor=self.executor
        )

    async def _notify(self, send, *args) -> None:
        # Notifiers make blocking HTTP calls and sleep between retries
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, functools.partial(send, *args))

    async def check_tool_installed(self) -> bool:
        """Check that ZMap can be started, within the availability timeout"""
        timeout = self.config.get_availability_timeout()
        try:
            result = await asyncio.wait_for(
                self.executor.run(self.scanner.executable_path, ['-h']),
                timeout=timeout
            )
        except asyncio.TimeoutError:
            logging.error(f"ZMap availability check timed out after {timeout}s")
            return False

        if not result.success:
            logging.error(f"ZMap not found: {result.error}")
        return result.success

    def build_scanner(self, subnets: Union[str, Sequence[str]], port: Optional[int] = None,
                      scan_type: Optional[str] = None,
                      options: Optional[Mapping[str, Any]] = None) -> ZMapScanner:
        """
        Build the scanner for a request

        Args:
            subnets: Subnet or subnets to scan
            port: Target port, defaults to the configured port
            scan_type: One of 'tcp_synscan', 'icmp_echo' or 'udp'
            options: Extra ZMap options, applied over the preset

        Returns:
            Configured ZMapScanner

        Raises:
            InvalidScanRequestError: No subnet was given or the scan type is unknown
        """
        if isinstance(subnets, str):
            subnets = [subnets]
        subnets = [subnet.strip() for subnet in subnets or [] if subnet.strip()]
        if not subnets:
            raise InvalidScanRequestError('Target subnet is required')

        port = port if port is not None else self.config.get_target_port()
        scan_type = scan_type or self.config.get_scan_type()
        options = dict(options or {})

        if scan_type == 'tcp_synscan':
            preset = {'probe_module': ScanType.TCP_SYN.value, 'target_port': port}
        elif scan_type == 'icmp_echo':
            preset = {'probe_module': ScanType.ICMP_ECHO.value}
        elif scan_type == 'udp':
            preset = {'probe_module': ScanType.UDP.value, 'target_port': port}
            if not any(key in options for key in ('probe_args', 'probeArgs')):
                preset['probe_args'] = self.config.get_udp_probe_args()
        else:
            raise InvalidScanRequestError(f"Unsupported scan type: {scan_type}")

        return self.scanner.set_config(preset, subnet=subnets).set_config(options)

    async def run(self, subnets: Union[str, Sequence[str]], port: Optional[int] = None,
                  scan_type: Optional[str] = None,
                  options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Run a scan and return its report

        Returns:
            Dictionary with 'scan_id', 'success', 'command', 'results',
            'count', 'hosts', 'hosts_scanned', 'hosts_up' and 'raw_output'

        Raises:
            InvalidScanRequestError: The request is invalid
            ToolUnavailableError: ZMap is not installed or cannot be started
            ScanExecutionError: ZMap reported a failure
        """
        port = port if port is not None else self.config.get_target_port()
        scan_type = scan_type or self.config.get_scan_type()
        scanner = self.build_scanner(subnets, port, scan_type, options)

        if not await self.check_tool_installed():
            raise ToolUnavailableError(
                'ZMap is not installed or not found in PATH. '
                'Visit https://github.com/zmap/zmap for installation instructions.'
            )

        scan_id = datetime.now().strftime("%Y%m%d_%H%M%S")
        command = [scanner.executable_path] + scanner.build_command()
        targets = self.analyzer.estimate_host_count(scanner.get_config().subnets)
        logging.info(f"Starting scan {scan_id}: {format_command(command)}")
        await self._notify(self.notification_manager.notify_scan_started, scan_id, command, targets)

        result = await scanner.execute()

        if not result.success:
            error = result.error or 'Scan failed'
            logging.error(f"Scan {scan_id} failed: {error}")
            await self._notify(self.notification_manager.notify_scan_completed, scan_id, False, {'error': error})
            if not result.available:
                raise ToolUnavailableError(error)
            raise ScanExecutionError(error, result.exit_code)

        fallback_port = port if self.config.use_fallback_parse() else None
        records = parse_output(result.output, fallback_port)
        hosts = self.analyzer.classify(records, scan_type, port)
        summary = self.analyzer.summarize(hosts, scanner.get_config().subnets)

        report = {
            'scan_id': scan_id,
            'success': True,
            'command': command,
            'results': records,
            'count': len(records),
            'hosts': hosts,
            'hosts_scanned': summary['hosts_scanned'],
            'hosts_up': summary['hosts_up'],
            'raw_output': result.output,
        }

        logging.info(f"Scan {scan_id} completed: {summary['hosts_up']} hosts up of {summary['hosts_scanned']}")
        await self._notify(self.notification_manager.notify_scan_completed, scan_id, True, report)
        return report

