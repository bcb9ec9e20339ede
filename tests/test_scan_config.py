"""
ScanConfiguration tests: normalisation, merging and immutability.
"""

import pytest

from netzap.core.scan_config import ScanConfiguration


def test_merge_right_hand_values_win():
    config = ScanConfiguration(rate=100)
    merged = config.merge({'rate': 200, 'bandwidth': '1M'})

    assert merged.to_dict() == {'rate': 200, 'bandwidth': '1M'}


def test_merge_leaves_receiver_untouched():
    config = ScanConfiguration(rate=100)
    config.merge(rate=200, quiet=True)

    assert config.to_dict() == {'rate': 100}


def test_merge_keeps_first_key_position():
    config = ScanConfiguration({'rate': 1, 'seed': 2}).merge(rate=3)

    assert list(config) == ['rate', 'seed']


def test_camel_case_keys_are_normalised():
    config = ScanConfiguration({'targetPort': 443, 'dryRun': True})

    assert config.to_dict() == {'target_port': 443, 'dry_run': True}
    assert config['targetPort'] == 443
    assert 'dryRun' in config


def test_camel_and_snake_spellings_share_a_slot():
    config = ScanConfiguration(target_port=80).merge({'targetPort': 8080})

    assert config.to_dict() == {'target_port': 8080}


def test_none_unsets_a_key():
    config = ScanConfiguration(rate=100, seed=5).merge(seed=None)

    assert 'seed' not in config
    assert len(config) == 1


def test_subnet_normalised_to_tuple():
    assert ScanConfiguration(subnet='10.0.0.0/8').subnets == ('10.0.0.0/8',)
    assert ScanConfiguration(subnet=['10.0.0.0/8', '192.168.0.0/16']).subnets == ('10.0.0.0/8', '192.168.0.0/16')


def test_empty_subnet_is_unset():
    config = ScanConfiguration(subnet='10.0.0.0/8').merge(subnet='  ')

    assert 'subnet' not in config
    assert config.subnets == ()


def test_output_fields_list_is_frozen():
    fields = ['saddr', 'dport']
    config = ScanConfiguration(output_fields=fields)
    fields.append('sport')

    assert config['output_fields'] == ('saddr', 'dport')


def test_user_metadata_mapping_is_copied():
    metadata = {'team': 'blue'}
    config = ScanConfiguration(user_metadata=metadata)
    metadata['team'] = 'red'

    assert config['user_metadata'] == {'team': 'blue'}


def test_rejects_unsupported_values():
    with pytest.raises(TypeError):
        ScanConfiguration(rate={'fast': True})
    with pytest.raises(TypeError):
        ScanConfiguration(subnet=42)


def test_equality_with_plain_dict():
    assert ScanConfiguration(rate=1) == {'rate': 1}
