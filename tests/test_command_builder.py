"""
Command compilation tests.
"""

import json

from netzap.core.scan_config import ScanConfiguration
from netzap.scanning.command_builder import build_command, build_invocation, format_command


def test_value_options_emit_flag_and_value_in_insertion_order():
    config = ScanConfiguration({'probeModule': 'tcp_synscan', 'targetPort': 80, 'rate': 1000})

    assert build_command(config) == [
        '--probe-module', 'tcp_synscan',
        '--target-port', '80',
        '--rate', '1000',
    ]


def test_compilation_is_deterministic():
    config = ScanConfiguration(target_port=443, output_fields=['saddr'], quiet=True, subnet='10.0.0.0/8')

    assert build_command(config) == build_command(config)


def test_true_boolean_emits_only_the_flag():
    assert build_command(ScanConfiguration(dry_run=True)) == ['--dry-run']


def test_false_boolean_emits_nothing():
    assert build_command(ScanConfiguration(dry_run=False, vpn_mode=False)) == []


def test_output_fields_list_and_string_compile_identically():
    from_list = build_command(ScanConfiguration(output_fields=['saddr', 'dport']))
    from_string = build_command(ScanConfiguration(output_fields='saddr,dport'))

    assert from_list == from_string == ['--output-fields', 'saddr,dport']


def test_user_metadata_mapping_is_serialised_once():
    args = build_command(ScanConfiguration(user_metadata={'owner': 'ops', 'ticket': 7}))

    assert args[0] == '--user-metadata'
    assert json.loads(args[1]) == {'owner': 'ops', 'ticket': 7}
    assert len(args) == 2


def test_user_metadata_string_passes_through():
    args = build_command(ScanConfiguration(userMetadata='{"a": 1}'))

    assert args == ['--user-metadata', '{"a": 1}']


def test_subnet_is_last_and_has_no_flag():
    config = ScanConfiguration(subnet='10.0.0.0/8', rate=10)
    args = build_command(config)

    assert args[-1] == '10.0.0.0/8'
    assert '--subnet' not in args
    assert args == ['--rate', '10', '10.0.0.0/8']


def test_multiple_subnets_become_separate_positional_arguments():
    config = ScanConfiguration(subnet=['10.0.0.0/8', '192.168.1.0/24'], quiet=True)

    assert build_command(config) == ['--quiet', '10.0.0.0/8', '192.168.1.0/24']


def test_mapped_and_derived_flags():
    config = ScanConfiguration(config_file='/etc/zmap.conf', shard_total=4, shard_current=1)

    assert build_command(config) == [
        '--config', '/etc/zmap.conf',
        '--shard-total', '4',
        '--shard-current', '1',
    ]


def test_cores_list_is_comma_joined():
    assert build_command(ScanConfiguration(cores=[0, 2, 4])) == ['--cores', '0,2,4']


def test_extension_option_uses_case_converter():
    assert build_command(ScanConfiguration({'probeTtl': 64})) == ['--probe-ttl', '64']


def test_build_invocation_prefixes_executable():
    config = ScanConfiguration(rate=5, subnet='1.2.3.0/24')

    assert build_invocation('/usr/sbin/zmap', config) == ['/usr/sbin/zmap', '--rate', '5', '1.2.3.0/24']


def test_format_command_quotes_tokens():
    assert format_command(['zmap', '--probe-args', 'text "hi"']) == 'zmap --probe-args \'text "hi"\''
