"""
ZMap option catalogue.
Maps configuration keys to ZMap command-line flags and value kinds.
"""

import re
from enum import Enum
from typing import Any, Dict, Optional


class ValueKind(Enum):
    """How an option value is rendered on the command line"""
    FLAG = 'flag'              # boolean switch, no value token
    VALUE = 'value'            # flag followed by str(value)
    LIST = 'list'              # sequence joined with commas
    JSON = 'json'              # mapping serialised as JSON text
    POSITIONAL = 'positional'  # trailing argument, no flag


class ScanType(Enum):
    """ZMap probe modules"""
    TCP_SYN = 'tcp_synscan'
    ICMP_ECHO = 'icmp_echoscan'
    UDP = 'udp'
    TCP_SYNACK = 'tcp_synackscan'
    TCP_ACK = 'tcp_ack'
    TCP_CUSTOM = 'tcp'
    ARP = 'arp'
    IPV6_TCP_SYN = 'ipv6_tcp_syn'
    IPV6_ICMP_ECHO = 'ipv6_icmp_echo'


class TemplateField(Enum):
    """Fields that can be substituted into UDP probe templates"""
    SADDR = 'SADDR'
    SADDR_N = 'SADDR_N'
    DADDR = 'DADDR'
    DADDR_N = 'DADDR_N'
    SPORT = 'SPORT'
    SPORT_N = 'SPORT_N'
    DPORT = 'DPORT'
    DPORT_N = 'DPORT_N'
    RAND_BYTE = 'RAND_BYTE'
    RAND_DIGIT = 'RAND_DIGIT'
    RAND_ALPHA = 'RAND_ALPHA'
    RAND_ALPHANUM = 'RAND_ALPHANUM'


# Flag spellings that are kept explicit rather than derived from the key
FLAG_MAPPING: Dict[str, str] = {
    'probe_module': '--probe-module',
    'probe_args': '--probe-args',
    'target_port': '--target-port',
    'source_port': '--source-port',
    'source_ip': '--source-ip',
    'gateway_mac': '--gateway-mac',
    'source_mac': '--source-mac',
    'interface': '--interface',
    'interface_name': '--interface',
    'max_targets': '--max-targets',
    'max_results': '--max-results',
    'max_runtime': '--max-runtime',
    'cooldown_time': '--cooldown-time',
    'output_file': '--output-file',
    'blacklist_file': '--blacklist-file',
    'whitelist_file': '--whitelist-file',
    'output_fields': '--output-fields',
    'output_module': '--output-module',
    'output_module_args': '--output-module-args',
    'output_filter': '--output-filter',
    'log_file': '--log-file',
    'log_directory': '--log-directory',
    'metadata_file': '--metadata-file',
    'status_updates_file': '--status-updates-file',
    'disable_syslog': '--disable-syslog',
    'user_metadata': '--user-metadata',
    'config_file': '--config',
    'max_sendto_failures': '--max-sendto-failures',
    'min_hitrate': '--min-hitrate',
    'sender_threads': '--sender-threads',
}

# Alternative keys accepted for an option
KEY_ALIASES: Dict[str, str] = {
    'interface_name': 'interface',
}

_INTERNAL_UPPER = re.compile(r'(?<!^)(?=[A-Z])')


def camel_to_kebab(name: str) -> str:
    """Convert a camelCase or snake_case name to kebab-case"""
    return _INTERNAL_UPPER.sub('-', name).replace('_', '-').lower()


def camel_to_snake(name: str) -> str:
    """Convert a camelCase name to snake_case"""
    return _INTERNAL_UPPER.sub('_', name).lower()


def option_to_flag(key: str) -> str:
    """
    Resolve the ZMap flag for a configuration key

    Args:
        key: Option key in snake_case or camelCase

    Returns:
        Flag spelling, e.g. '--source-port'
    """
    snake = camel_to_snake(key)
    if snake in FLAG_MAPPING:
        return FLAG_MAPPING[snake]
    return f"--{camel_to_kebab(key)}"


class ScanOption(Enum):
    """Every option ZMap accepts, with the kind of value it takes"""

    # Basic arguments
    TARGET_PORT = ValueKind.VALUE, 'target_port'
    OUTPUT_FILE = ValueKind.VALUE, 'output_file'
    BLACKLIST_FILE = ValueKind.VALUE, 'blacklist_file'
    WHITELIST_FILE = ValueKind.VALUE, 'whitelist_file'
    SUBNET = ValueKind.POSITIONAL, 'subnet'

    # Scan options
    RATE = ValueKind.VALUE, 'rate'
    BANDWIDTH = ValueKind.VALUE, 'bandwidth'
    MAX_TARGETS = ValueKind.VALUE, 'max_targets'
    MAX_RUNTIME = ValueKind.VALUE, 'max_runtime'
    MAX_RESULTS = ValueKind.VALUE, 'max_results'
    PROBES = ValueKind.VALUE, 'probes'
    COOLDOWN_TIME = ValueKind.VALUE, 'cooldown_time'
    SEED = ValueKind.VALUE, 'seed'
    RETRIES = ValueKind.VALUE, 'retries'
    DRY_RUN = ValueKind.FLAG, 'dry_run'
    SHARD_TOTAL = ValueKind.VALUE, 'shard_total'
    SHARD_CURRENT = ValueKind.VALUE, 'shard_current'

    # Network options
    SOURCE_PORT = ValueKind.VALUE, 'source_port'
    SOURCE_IP = ValueKind.VALUE, 'source_ip'
    GATEWAY_MAC = ValueKind.VALUE, 'gateway_mac'
    SOURCE_MAC = ValueKind.VALUE, 'source_mac'
    INTERFACE = ValueKind.VALUE, 'interface'
    VPN_MODE = ValueKind.FLAG, 'vpn_mode'

    # Probe options
    PROBE_MODULE = ValueKind.VALUE, 'probe_module'
    PROBE_ARGS = ValueKind.VALUE, 'probe_args'

    # Output options
    OUTPUT_MODULE = ValueKind.VALUE, 'output_module'
    OUTPUT_MODULE_ARGS = ValueKind.VALUE, 'output_module_args'
    OUTPUT_FIELDS = ValueKind.LIST, 'output_fields'
    OUTPUT_FILTER = ValueKind.VALUE, 'output_filter'

    # Logging and metadata
    VERBOSITY = ValueKind.VALUE, 'verbosity'
    LOG_FILE = ValueKind.VALUE, 'log_file'
    LOG_DIRECTORY = ValueKind.VALUE, 'log_directory'
    METADATA_FILE = ValueKind.VALUE, 'metadata_file'
    STATUS_UPDATES_FILE = ValueKind.VALUE, 'status_updates_file'
    QUIET = ValueKind.FLAG, 'quiet'
    DISABLE_SYSLOG = ValueKind.FLAG, 'disable_syslog'
    NOTES = ValueKind.VALUE, 'notes'
    USER_METADATA = ValueKind.JSON, 'user_metadata'

    # Additional options
    CONFIG_FILE = ValueKind.VALUE, 'config_file'
    MAX_SENDTO_FAILURES = ValueKind.VALUE, 'max_sendto_failures'
    MIN_HITRATE = ValueKind.VALUE, 'min_hitrate'
    SENDER_THREADS = ValueKind.VALUE, 'sender_threads'
    CORES = ValueKind.LIST, 'cores'
    IGNORE_INVALID_HOSTS = ValueKind.FLAG, 'ignore_invalid_hosts'

    @property
    def kind(self) -> ValueKind:
        return self.value[0]

    @property
    def key(self) -> str:
        return self.value[1]

    @property
    def flag(self) -> Optional[str]:
        if self.kind is ValueKind.POSITIONAL:
            return None
        return option_to_flag(self.key)

    @classmethod
    def lookup(cls, key: str) -> Optional['ScanOption']:
        """Find the option for a snake_case or camelCase key, or None for extension keys"""
        return _OPTIONS_BY_KEY.get(canonical_key(key))


_OPTIONS_BY_KEY: Dict[str, ScanOption] = {option.key: option for option in ScanOption}


def canonical_key(key: str) -> str:
    """Normalise a configuration key to the snake_case spelling used internally"""
    snake = camel_to_snake(key)
    return KEY_ALIASES.get(snake, snake)


def infer_kind(key: str, value: Any) -> ValueKind:
    """Value kind for a key, falling back to the value's type for extension options"""
    option = ScanOption.lookup(key)
    if option is not None:
        return option.kind
    if isinstance(value, bool):
        return ValueKind.FLAG
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if isinstance(value, dict):
        return ValueKind.JSON
    return ValueKind.VALUE
