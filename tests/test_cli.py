"""
Command-line interface tests.
"""

import json

import pytest

from netzap import __main__ as cli
from netzap.scanning.base_executor import ExecutionResult

from conftest import FakeExecutor


@pytest.fixture
def patched_executor(monkeypatch):
    real_runner = cli.ScanRunner
    executor = FakeExecutor(responses={
        '--probe-module': ExecutionResult(success=True, output="10.0.0.3,synack,80\n", exit_code=0),
        '--list-probe-modules': ExecutionResult(success=True, output="tcp_synscan\nudp\n"),
    })
    monkeypatch.setattr(cli, "ScanRunner", lambda config: real_runner(config, executor=executor))
    return executor


def test_version(capsys):
    assert cli.main(['--version']) == 0
    assert 'NetZap version' in capsys.readouterr().out


def test_print_command(capsys, tmp_path):
    code = cli.main(['-c', str(tmp_path / 'none.conf'), '--print-command', '-p', '443', '--rate', '50', '10.0.0.0/8'])

    assert code == 0
    assert capsys.readouterr().out.strip() == 'zmap --probe-module tcp_synscan --target-port 443 --rate 50 10.0.0.0/8'


def test_scan_prints_report(capsys, tmp_path, patched_executor):
    code = cli.main(['-c', str(tmp_path / 'none.conf'), '-p', '80', '10.0.0.0/24'])

    assert code == 0
    report = json.loads(capsys.readouterr().out)
    assert report['hosts_up'] == 1
    assert report['results'][0]['saddr'] == '10.0.0.3'


def test_list_probe_modules(capsys, tmp_path, patched_executor):
    assert cli.main(['-c', str(tmp_path / 'none.conf'), '--list-probe-modules']) == 0
    assert capsys.readouterr().out.split() == ['tcp_synscan', 'udp']


def test_errors_exit_with_one(tmp_path):
    assert cli.main(['-c', str(tmp_path / 'none.conf'), '-t', 'udp', '--print-command', '   ']) == 1


def test_bad_config_value_exits_with_one(tmp_path):
    conf = tmp_path / 'bad.conf'
    conf.write_text("[Scan]\ntarget_port = eighty\n", encoding="utf-8")

    assert cli.main(['-c', str(conf), '--print-command', '10.0.0.0/24']) == 1
