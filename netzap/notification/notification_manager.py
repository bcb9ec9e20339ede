"""
Notification Manager for the NetZap system.
Fans scan events out to every enabled notification service.
"""

import logging
from typing import Any, Dict, List, Optional

from netzap.config.configuration import ConfigManager
from netzap.notification.notification_interface import ScanNotifier


class NotificationManager:
    """Manages all notification services"""

    def __init__(self, config: ConfigManager, notifiers: Optional[List[ScanNotifier]] = None):
        """Initialize the notification manager with configuration"""
        self.config = config
        self.notifiers: List[ScanNotifier] = []
        if notifiers is None:
            self.load_notifiers()
        else:
            self.notifiers.extend(notifiers)

    def load_notifiers(self) -> None:
        """Load and initialize the built-in notification services"""
        from netzap.notification.slack_notifier import SlackNotifier

        self.notifiers.append(SlackNotifier(self.config))

        enabled_notifiers = [n.get_name() for n in self.notifiers if n.is_enabled()]
        if enabled_notifiers:
            logging.info(f"Enabled notification services: {', '.join(enabled_notifiers)}")
        else:
            logging.debug("No notification services are enabled")

    def _enabled_notifiers(self) -> List[ScanNotifier]:
        if not self.config.getboolean('Notification', 'enabled', fallback=True):
            return []
        return [n for n in self.notifiers if n.is_enabled()]

    def notify_scan_started(self, scan_id: str, command: List[str], targets: int) -> None:
        """Send notifications about scan start to all enabled notifiers"""
        for notifier in self._enabled_notifiers():
            try:
                success = notifier.notify_scan_started(scan_id, command, targets)
                if success:
                    logging.info(f"Successfully sent scan start notification via {notifier.get_name()}")
                else:
                    logging.warning(f"Failed to send scan start notification via {notifier.get_name()}")
            except Exception as e:
                logging.error(f"Error sending scan start notification via {notifier.get_name()}: {e}")

    def notify_scan_completed(self, scan_id: str, success: bool, report: Dict[str, Any]) -> None:
        """Send notifications about scan completion to all enabled notifiers"""
        for notifier in self._enabled_notifiers():
            try:
                notif_success = notifier.notify_scan_completed(scan_id, success, report)
                if notif_success:
                    logging.info(f"Successfully sent scan completion notification via {notifier.get_name()}")
                else:
                    logging.warning(f"Failed to send scan completion notification via {notifier.get_name()}")
            except Exception as e:
                logging.error(f"Error sending scan completion notification via {notifier.get_name()}: {e}")
