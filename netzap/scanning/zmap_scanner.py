"""
ZMap scanner facade for the NetZap system.
Accumulates scan options and runs ZMap through a command executor.
"""

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from netzap.analysis.result_parser import ScanRecord, parse_output
from netzap.config.options import ScanType
from netzap.core.scan_config import ScanConfiguration
from netzap.errors import (
    IntrospectionError, IntrospectionUnavailableError, ScanExecutionError, ToolUnavailableError
)
from netzap.scanning.base_executor import CommandExecutor, ExecutionResult
from netzap.scanning.command_builder import build_command, format_command
from netzap.scanning.probe_args import ProbeArgType, format_probe_args
from netzap.scanning.process_executor import ProcessExecutor

DEFAULT_EXECUTABLE = 'zmap'

_LEADING_TOKEN = re.compile(r'^\s*(\S+)')


class ZMapScanner:
    """
    Fluent builder around a ZMap configuration.

    Instances are immutable: every setter returns a new scanner with the
    merged configuration and the same executable and executor, so one
    base scanner can safely be specialised for several scans.
    """

    def __init__(self, config: Optional[Mapping] = None,
                 executable_path: str = DEFAULT_EXECUTABLE,
                 executor: Optional[CommandExecutor] = None):
        """Initialize the scanner with an optional starting configuration"""
        if isinstance(config, ScanConfiguration):
            self._config = config
        else:
            self._config = ScanConfiguration(config)
        self._executable_path = executable_path
        self._executor = executor if executor is not None else ProcessExecutor()

    def _derive(self, config: ScanConfiguration = None, executable_path: str = None) -> 'ZMapScanner':
        return ZMapScanner(
            config if config is not None else self._config,
            executable_path if executable_path is not None else self._executable_path,
            self._executor
        )

    @property
    def executable_path(self) -> str:
        return self._executable_path

    @property
    def executor(self) -> CommandExecutor:
        return self._executor

    def set_config(self, partial: Optional[Mapping] = None, **options: Any) -> 'ZMapScanner':
        """Return a scanner whose configuration is merged with the given options"""
        return self._derive(config=self._config.merge(partial, **options))

    def get_config(self) -> ScanConfiguration:
        """Get the current configuration"""
        return self._config

    def set_executable_path(self, path: str) -> 'ZMapScanner':
        """Return a scanner that runs the given ZMap executable"""
        return self._derive(executable_path=path)

    def build_command(self) -> List[str]:
        """ZMap arguments for the current configuration"""
        return build_command(self._config)

    # Scan presets

    def tcp_syn_scan(self, target_port: int, **options: Any) -> 'ZMapScanner':
        """Configure a TCP SYN scan of the given port"""
        return self.set_config(probe_module=ScanType.TCP_SYN.value, target_port=target_port, **options)

    def icmp_echo_scan(self, **options: Any) -> 'ZMapScanner':
        """Configure an ICMP echo scan"""
        return self.set_config(probe_module=ScanType.ICMP_ECHO.value, **options)

    def udp_scan(self, target_port: int, probe_type: Union[ProbeArgType, str],
                 probe_value: str, **options: Any) -> 'ZMapScanner':
        """
        Configure a UDP scan

        Args:
            target_port: Destination port
            probe_type: Payload encoding (text, hex or file)
            probe_value: Payload value
            **options: Further options merged after the preset
        """
        probe_args = format_probe_args(probe_type, probe_value)
        return self.set_config(
            probe_module=ScanType.UDP.value,
            target_port=target_port,
            probe_args=probe_args,
            **options
        )

    def target(self, subnets: Union[str, Sequence[str]]) -> 'ZMapScanner':
        """Set the subnet or subnets to scan, in CIDR notation"""
        return self.set_config(subnet=subnets)

    # Scan options

    def set_rate(self, pps: int) -> 'ZMapScanner':
        """Set send rate in packets per second"""
        return self.set_config(rate=pps)

    def set_bandwidth(self, bps: str) -> 'ZMapScanner':
        """Set send bandwidth, with optional G, M or K suffix"""
        return self.set_config(bandwidth=bps)

    def set_max_targets(self, maximum: Union[int, str]) -> 'ZMapScanner':
        """Cap the number of targets, as a count or a percentage of the address space"""
        return self.set_config(max_targets=maximum)

    def set_max_results(self, maximum: int) -> 'ZMapScanner':
        return self.set_config(max_results=maximum)

    def set_max_runtime(self, seconds: int) -> 'ZMapScanner':
        return self.set_config(max_runtime=seconds)

    def set_probes(self, count: int) -> 'ZMapScanner':
        """Set the number of probes sent to each address"""
        return self.set_config(probes=count)

    def set_cooldown_time(self, seconds: int) -> 'ZMapScanner':
        """Set how long to keep receiving after the last probe is sent"""
        return self.set_config(cooldown_time=seconds)

    def set_seed(self, seed: int) -> 'ZMapScanner':
        """Set the seed used for address permutation"""
        return self.set_config(seed=seed)

    def set_retries(self, count: int) -> 'ZMapScanner':
        """Set the maximum number of send retries per packet"""
        return self.set_config(retries=count)

    def set_dry_run(self, enabled: bool = True) -> 'ZMapScanner':
        """Print packets instead of sending them"""
        return self.set_config(dry_run=enabled)

    def set_sharding(self, total: int, current: int = 0) -> 'ZMapScanner':
        """
        Split the scan into shards

        Args:
            total: Total number of shards
            current: Shard handled by this scan (0-indexed)
        """
        return self.set_config(shard_total=total, shard_current=current)

    # Network options

    def set_source_port(self, port: Union[int, str]) -> 'ZMapScanner':
        """Set source port or range, e.g. '40000-50000'"""
        return self.set_config(source_port=port)

    def set_source_ip(self, ip: str) -> 'ZMapScanner':
        return self.set_config(source_ip=ip)

    def set_interface(self, iface: str) -> 'ZMapScanner':
        return self.set_config(interface=iface)

    def set_gateway_mac(self, mac: str) -> 'ZMapScanner':
        return self.set_config(gateway_mac=mac)

    def set_source_mac(self, mac: str) -> 'ZMapScanner':
        return self.set_config(source_mac=mac)

    def set_vpn_mode(self, enabled: bool = True) -> 'ZMapScanner':
        """Send IP packets instead of Ethernet frames"""
        return self.set_config(vpn_mode=enabled)

    # Input and output

    def set_output_file(self, filename: str) -> 'ZMapScanner':
        return self.set_config(output_file=filename)

    def set_blacklist_file(self, filename: str) -> 'ZMapScanner':
        return self.set_config(blacklist_file=filename)

    def set_whitelist_file(self, filename: str) -> 'ZMapScanner':
        return self.set_config(whitelist_file=filename)

    def set_output_fields(self, fields: Union[str, Sequence[str]]) -> 'ZMapScanner':
        """Set output fields as a list or a comma-separated string"""
        return self.set_config(output_fields=fields)

    def set_output_module(self, module: str, args: Optional[str] = None) -> 'ZMapScanner':
        """Set the output module and, optionally, its arguments"""
        return self.set_config(output_module=module, output_module_args=args)

    def set_output_filter(self, expression: str) -> 'ZMapScanner':
        return self.set_config(output_filter=expression)

    # Logging and metadata

    def set_verbosity(self, level: int) -> 'ZMapScanner':
        """Set log verbosity (0-5)"""
        return self.set_config(verbosity=level)

    def set_log_file(self, filename: str) -> 'ZMapScanner':
        return self.set_config(log_file=filename)

    def set_log_directory(self, directory: str) -> 'ZMapScanner':
        return self.set_config(log_directory=directory)

    def set_metadata_file(self, filename: str) -> 'ZMapScanner':
        return self.set_config(metadata_file=filename)

    def set_status_updates_file(self, filename: str) -> 'ZMapScanner':
        return self.set_config(status_updates_file=filename)

    def set_quiet(self, enabled: bool = True) -> 'ZMapScanner':
        """Suppress status updates"""
        return self.set_config(quiet=enabled)

    def disable_syslog(self, disabled: bool = True) -> 'ZMapScanner':
        return self.set_config(disable_syslog=disabled)

    def set_notes(self, notes: str) -> 'ZMapScanner':
        """Set notes injected into the scan metadata"""
        return self.set_config(notes=notes)

    def set_user_metadata(self, metadata: Union[Dict[str, Any], str]) -> 'ZMapScanner':
        """Set user metadata as a dictionary or a JSON string"""
        if isinstance(metadata, dict):
            metadata = json.dumps(metadata)
        return self.set_config(user_metadata=metadata)

    # Additional options

    def set_config_file(self, filename: str) -> 'ZMapScanner':
        """Set a ZMap configuration file"""
        return self.set_config(config_file=filename)

    def set_max_sendto_failures(self, maximum: int) -> 'ZMapScanner':
        return self.set_config(max_sendto_failures=maximum)

    def set_min_hitrate(self, rate: float) -> 'ZMapScanner':
        return self.set_config(min_hitrate=rate)

    def set_sender_threads(self, count: int) -> 'ZMapScanner':
        return self.set_config(sender_threads=count)

    def set_cores(self, cores: Union[str, Sequence[int]]) -> 'ZMapScanner':
        """Set the cores to pin to, as a list or a comma-separated string"""
        return self.set_config(cores=cores)

    def ignore_invalid_hosts(self, enabled: bool = True) -> 'ZMapScanner':
        """Ignore invalid entries in the whitelist and blacklist"""
        return self.set_config(ignore_invalid_hosts=enabled)

    # Execution

    async def execute(self) -> ExecutionResult:
        """
        Run ZMap with the current configuration

        Returns:
            ExecutionResult with the raw output; nothing is parsed here
        """
        args = build_command(self._config)
        logging.info(f"Running {format_command([self._executable_path] + args)}")
        return await self._executor.run(self._executable_path, args)

    async def execute_and_parse(self, fallback_port: Optional[Union[int, str]] = None) -> List[ScanRecord]:
        """
        Run ZMap and parse its output

        Args:
            fallback_port: When set, output without CSV records is read as
                a bare address list with this port

        Returns:
            Parsed scan records

        Raises:
            ToolUnavailableError: ZMap could not be started
            ScanExecutionError: ZMap reported a failure
        """
        result = await self.execute()

        if not result.available:
            raise ToolUnavailableError(result.error or 'ZMap is not available')
        if not result.success:
            raise ScanExecutionError(result.error or 'Failed to execute ZMap scan', result.exit_code)

        return parse_output(result.output, fallback_port)

    # Introspection

    async def _introspect(self, args: List[str], failure_message: str) -> str:
        result = await self._executor.run(self._executable_path, args)

        if not result.available:
            raise IntrospectionUnavailableError(result.error or 'ZMap is not available')
        if not result.success:
            raise IntrospectionError(result.error or failure_message)

        return result.output

    @staticmethod
    def _non_blank_lines(output: str) -> List[str]:
        return [line.strip() for line in output.strip().split('\n') if line.strip()]

    async def list_probe_modules(self) -> List[str]:
        """List the probe modules ZMap supports"""
        output = await self._introspect(['--list-probe-modules'], 'Failed to list probe modules')
        return self._non_blank_lines(output)

    async def list_output_modules(self) -> List[str]:
        """List the output modules ZMap supports"""
        output = await self._introspect(['--list-output-modules'], 'Failed to list output modules')
        return self._non_blank_lines(output)

    async def list_output_fields(self) -> List[str]:
        """List output field names for the default probe module"""
        output = await self._introspect(['--list-output-fields'], 'Failed to list output fields')
        fields = []
        for line in self._non_blank_lines(output):
            match = _LEADING_TOKEN.match(line)
            fields.append(match.group(1) if match else line)
        return fields

    async def help(self) -> str:
        return await self._introspect(['--help'], 'Failed to get help')

    async def version(self) -> str:
        output = await self._introspect(['--version'], 'Failed to get version')
        return output.strip()

    async def probe_module_help(self, module: Optional[str] = None) -> str:
        """Help text for one probe module, or for all of them when no module is given"""
        args = ['--probe-module', module, '--help'] if module else ['--help-probe-modules']
        return await self._introspect(args, 'Failed to get probe module help')

    async def output_module_help(self, module: Optional[str] = None) -> str:
        """Help text for one output module, or for all of them when no module is given"""
        args = ['--output-module', module, '--help'] if module else ['--help-output-modules']
        return await self._introspect(args, 'Failed to get output module help')
