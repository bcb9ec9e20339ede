"""
Notification manager and Slack notifier tests.
"""

import json
import textwrap

import pytest
import requests

from netzap.config.configuration import ConfigManager
from netzap.notification.notification_manager import NotificationManager
from netzap.notification.slack_notifier import SlackNotifier


class FakeResponse:
    def __init__(self, status_code):
        self.status_code = status_code


@pytest.fixture
def slack_config(config_file):
    return ConfigManager(config_file(textwrap.dedent("""
        [Slack]
        enabled = true
        webhook_url = https://hooks.slack.example/T000/B000
        max_retries = 2
        retry_delay_seconds = 0
    """)))


@pytest.fixture
def posted(monkeypatch):
    calls = []

    def fake_post(url, data=None, headers=None, timeout=None):
        calls.append((url, json.loads(data)))
        return FakeResponse(200)

    monkeypatch.setattr(requests, 'post', fake_post)
    return calls


def test_slack_disabled_by_default(posted):
    notifier = SlackNotifier(ConfigManager())

    assert not notifier.is_enabled()
    assert notifier.notify_scan_started('s1', ['zmap'], 1) is False
    assert posted == []


def test_scan_started_message(slack_config, posted):
    sent = SlackNotifier(slack_config).notify_scan_started('20240101_120000', ['zmap', '-p', '80', '10.0.0.0/24'], 256)

    assert sent
    url, payload = posted[0]
    assert url == 'https://hooks.slack.example/T000/B000'
    text = payload['blocks'][1]['text']['text']
    assert '20240101_120000' in text
    assert '256 addresses' in text
    assert 'zmap -p 80 10.0.0.0/24' in text


def test_scan_completed_lists_hosts(slack_config, posted):
    report = {
        'hosts_up': 1,
        'hosts_scanned': 256,
        'hosts': [{'ip': '10.0.0.5', 'port': 22, 'protocol': 'tcp', 'status': 'open'}],
    }

    assert SlackNotifier(slack_config).notify_scan_completed('s2', True, report)

    blocks = posted[0][1]['blocks']
    assert 'Hosts Up:* 1/256' in blocks[1]['text']['text']
    assert '10.0.0.5' in blocks[2]['text']['text']


def test_scan_failure_message(slack_config, posted):
    SlackNotifier(slack_config).notify_scan_completed('s3', False, {'error': 'permission denied'})

    assert 'permission denied' in posted[0][1]['blocks'][1]['text']['text']


def test_retries_then_gives_up(slack_config, monkeypatch):
    attempts = []

    def failing_post(url, data=None, headers=None, timeout=None):
        attempts.append(url)
        raise requests.ConnectionError("unreachable")

    monkeypatch.setattr(requests, 'post', failing_post)

    assert SlackNotifier(slack_config).notify_scan_started('s4', ['zmap'], 1) is False
    assert len(attempts) == 2


def test_manager_swallows_notifier_errors(slack_config):
    class BrokenNotifier:
        def is_enabled(self):
            return True

        def get_name(self):
            return "Broken"

        def notify_scan_started(self, scan_id, command, targets):
            raise RuntimeError("boom")

        def notify_scan_completed(self, scan_id, success, report):
            raise RuntimeError("boom")

    manager = NotificationManager(slack_config, notifiers=[BrokenNotifier()])

    manager.notify_scan_started('s5', ['zmap'], 1)
    manager.notify_scan_completed('s5', True, {})


def test_manager_loads_slack_by_default(slack_config):
    manager = NotificationManager(slack_config)

    assert [n.get_name() for n in manager.notifiers] == ['Slack']


def test_manager_respects_global_switch(config_file, posted):
    config = ConfigManager(config_file(textwrap.dedent("""
        [Notification]
        enabled = false

        [Slack]
        enabled = true
        webhook_url = https://hooks.slack.example/x
    """)))

    NotificationManager(config).notify_scan_started('s6', ['zmap'], 1)

    assert posted == []
