"""
Configuration management for the NetZap system.
Handles loading, validating, and accessing configuration.
"""

import os
import configparser
import logging
from typing import Any, Dict, Optional

from netzap.config.options import ScanOption, ValueKind, canonical_key, infer_kind

SCAN_OPTIONS_SECTION = 'ScanOptions'


class ConfigManager:
    """Handles all configuration-related operations"""

    DEFAULT_CONFIG = {
        'General': {
            'executable_path': 'zmap',
            'log_file': ''
        },
        'Scan': {
            'scan_type': 'tcp_synscan',
            'target_port': '80',
            'fallback_parse': 'true',
            'udp_probe_args': 'text "\\0"'
        },
        SCAN_OPTIONS_SECTION: {},
        'Reliability': {
            'availability_timeout_seconds': '2',
            'execution_timeout_seconds': '0'
        },
        'Notification': {
            'enabled': 'true'
        },
        'Slack': {
            'enabled': 'false',
            'webhook_url': '',
            'max_retries': '3',
            'retry_delay_seconds': '5'
        }
    }

    def __init__(self, config_file: Optional[str] = None):
        """Initialize the configuration manager with an optional config file"""
        self.config_file = config_file
        # Probe args and output filters may contain '%'
        self.config = configparser.ConfigParser(interpolation=None)
        self._load_config()
        self._validate_config()

    def _load_config(self) -> None:
        """Load configuration from file with default fallback values"""
        self.config.read_dict(self.DEFAULT_CONFIG)

        if not self.config_file:
            logging.debug("No configuration file given, using defaults")
            return

        if os.path.exists(self.config_file):
            try:
                self.config.read(self.config_file)
                logging.info(f"Configuration loaded from {self.config_file}")
            except configparser.Error as e:
                logging.error(f"Error loading configuration from {self.config_file}: {e}")
                logging.warning("Using default configuration values")
        else:
            logging.warning(f"Configuration file {self.config_file} not found, using defaults")

    def _validate_config(self) -> None:
        """Validate critical configuration options"""
        for key in self.config.options(SCAN_OPTIONS_SECTION):
            if ScanOption.lookup(key) is None:
                logging.warning(f"Unknown ZMap option '{key}' in [{SCAN_OPTIONS_SECTION}], passing it through")

        if self.getboolean('Slack', 'enabled', fallback=False) and not self.get('Slack', 'webhook_url'):
            logging.warning("Slack notifications enabled but no webhook_url configured")

    def get(self, section: str, option: str, fallback: Any = None) -> str:
        """Get a configuration value"""
        return self.config.get(section, option, fallback=fallback)

    def getint(self, section: str, option: str, fallback: int = None) -> int:
        """Get an integer configuration value"""
        return self.config.getint(section, option, fallback=fallback)

    def getboolean(self, section: str, option: str, fallback: bool = None) -> bool:
        """Get a boolean configuration value"""
        return self.config.getboolean(section, option, fallback=fallback)

    def getfloat(self, section: str, option: str, fallback: float = None) -> float:
        """Get a float configuration value"""
        return self.config.getfloat(section, option, fallback=fallback)

    def get_executable_path(self) -> str:
        """Get the ZMap executable path"""
        return self.get('General', 'executable_path')

    def get_log_file(self) -> Optional[str]:
        """Get the log file path, or None when logging to the console only"""
        return self.get('General', 'log_file') or None

    def get_scan_type(self) -> str:
        """Get the default scan type"""
        return self.get('Scan', 'scan_type')

    def get_target_port(self) -> int:
        """Get the default target port"""
        return self.getint('Scan', 'target_port')

    def get_udp_probe_args(self) -> str:
        """Get the default UDP probe arguments"""
        return self.get('Scan', 'udp_probe_args')

    def use_fallback_parse(self) -> bool:
        """Whether bare address output should be parsed as results"""
        return self.getboolean('Scan', 'fallback_parse')

    def get_availability_timeout(self) -> float:
        """Get the timeout for the ZMap availability check in seconds"""
        return self.getfloat('Reliability', 'availability_timeout_seconds')

    def get_execution_timeout(self) -> Optional[float]:
        """Get the scan timeout in seconds, or None for no timeout"""
        timeout = self.getfloat('Reliability', 'execution_timeout_seconds')
        return timeout if timeout > 0 else None

    def get_scan_options(self) -> Dict[str, Any]:
        """
        Get the ZMap options from the [ScanOptions] section

        Values are converted according to the option kind: switches become
        booleans, list options are split on commas and integer strings
        become ints.

        Returns:
            Dictionary of snake_case option keys to typed values
        """
        options = {}
        for key in self.config.options(SCAN_OPTIONS_SECTION):
            raw = self.get(SCAN_OPTIONS_SECTION, key)
            option = ScanOption.lookup(key)
            kind = option.kind if option else infer_kind(key, raw)

            if kind is ValueKind.FLAG:
                try:
                    value = self.getboolean(SCAN_OPTIONS_SECTION, key)
                except ValueError:
                    logging.warning(f"Ignoring [{SCAN_OPTIONS_SECTION}] {key} = {raw}: not a boolean")
                    continue
            elif kind in (ValueKind.LIST, ValueKind.POSITIONAL):
                value = [item.strip() for item in raw.split(',') if item.strip()]
            elif raw.lstrip('-').isdigit():
                value = int(raw)
            else:
                value = raw

            options[canonical_key(key)] = value
        return options
