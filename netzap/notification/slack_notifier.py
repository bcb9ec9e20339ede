"""
Slack notification implementation for the NetZap system.
"""

import logging
import json
import time
import requests
from datetime import datetime
from typing import Any, Dict, List

from netzap.config.configuration import ConfigManager
from netzap.notification.notification_interface import ScanNotifier
from netzap.scanning.command_builder import format_command

# Hosts listed in a completion message before the list is truncated
MAX_LISTED_HOSTS = 25


class SlackNotifier(ScanNotifier):
    """Slack notification implementation for scan events"""

    def __init__(self, config: ConfigManager):
        """Initialize Slack notifier with configuration"""
        self.config = config
        self.max_retries = config.getint('Slack', 'max_retries', fallback=3)
        self.retry_delay = config.getfloat('Slack', 'retry_delay_seconds', fallback=5)

    def is_enabled(self) -> bool:
        """Check if Slack notifications are enabled"""
        return self.config.getboolean('Slack', 'enabled', fallback=False)

    def get_name(self) -> str:
        """Get the name of this notification service"""
        return "Slack"

    def _get_webhook_url(self) -> str:
        """Get Slack webhook URL from config"""
        return self.config.get('Slack', 'webhook_url', fallback='')

    def _send_slack_message(self, blocks: List[Dict[str, Any]]) -> bool:
        """
        Send message to Slack webhook with retry logic

        Args:
            blocks: Slack message blocks

        Returns:
            True if message was sent successfully, False otherwise
        """
        if not self.is_enabled():
            return False

        webhook_url = self._get_webhook_url()
        if not webhook_url:
            logging.error("Slack webhook URL not configured")
            return False

        payload = {
            "blocks": blocks
        }

        headers = {
            "Content-Type": "application/json"
        }

        for attempt in range(self.max_retries):
            try:
                response = requests.post(
                    webhook_url,
                    data=json.dumps(payload),
                    headers=headers,
                    timeout=10
                )

                if response.status_code == 200:
                    logging.info("Slack notification sent successfully")
                    return True
                else:
                    logging.warning(f"Failed to send Slack notification (attempt {attempt+1}/{self.max_retries}): HTTP {response.status_code}")

            except requests.RequestException as e:
                logging.error(f"Error sending Slack notification (attempt {attempt+1}/{self.max_retries}): {e}")

            if attempt < self.max_retries - 1:
                time.sleep(self.retry_delay)

        logging.error("Maximum Slack notification retry attempts reached")
        return False

    def _footer(self) -> Dict[str, Any]:
        return {
            "type": "context",
            "elements": [
                {
                    "type": "mrkdwn",
                    "text": f"NetZap | {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}"
                }
            ]
        }

    def notify_scan_started(self, scan_id: str, command: List[str], targets: int) -> bool:
        """Send Slack notification about scan start"""
        blocks = [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": "🔍 ZMap Scan Started"
                }
            },
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": f"*Scan ID:* {scan_id}\n*Targets:* {targets} addresses\n*Command:* `{format_command(command)}`"
                }
            },
            self._footer()
        ]
        return self._send_slack_message(blocks)

    def notify_scan_completed(self, scan_id: str, success: bool, report: Dict[str, Any]) -> bool:
        """Send Slack notification about scan completion"""
        status = ":white_check_mark: Successfully" if success else ":x: With Errors"

        if success:
            summary = (f"*Scan ID:* {scan_id}\n"
                       f"*Hosts Up:* {report.get('hosts_up', 0)}/{report.get('hosts_scanned', 0)}")
        else:
            summary = f"*Scan ID:* {scan_id}\n*Error:* {report.get('error', 'Unknown error')}"

        blocks = [
            {
                "type": "header",
                "text": {
                    "type": "plain_text",
                    "text": f"🏁 ZMap Scan Completed {status}"
                }
            },
            {
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": summary
                }
            }
        ]

        hosts = report.get('hosts') or []
        if hosts:
            lines = [f"• *{host['ip']}* - {host['protocol']}/{host['port']} {host['status']}"
                     for host in hosts[:MAX_LISTED_HOSTS]]
            if len(hosts) > MAX_LISTED_HOSTS:
                lines.append(f"…and {len(hosts) - MAX_LISTED_HOSTS} more")
            blocks.append({
                "type": "section",
                "text": {
                    "type": "mrkdwn",
                    "text": "*Responding Hosts:*\n" + "\n".join(lines)
                }
            })

        blocks.append(self._footer())
        return self._send_slack_message(blocks)
