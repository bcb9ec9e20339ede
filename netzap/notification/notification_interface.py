"""
Notification interfaces for the NetZap system.
Defines contracts for scan notification implementations.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class BaseNotifier(ABC):
    """Base interface for all notification services"""

    @abstractmethod
    def is_enabled(self) -> bool:
        """Check if this notification service is enabled in config"""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get the name of this notification service"""
        pass


class ScanNotifier(BaseNotifier):
    """Interface for services that notify about scan events"""

    @abstractmethod
    def notify_scan_started(self, scan_id: str, command: List[str], targets: int) -> bool:
        """
        Send notification that a scan has started

        Args:
            scan_id: Unique ID of the current scan
            command: ZMap command line being run
            targets: Estimated number of addresses being scanned

        Returns:
            True if notification was sent successfully, False otherwise
        """
        pass

    @abstractmethod
    def notify_scan_completed(self, scan_id: str, success: bool, report: Dict[str, Any]) -> bool:
        """
        Send notification that a scan has completed

        Args:
            scan_id: Unique ID of the scan
            success: Whether the scan completed successfully
            report: Scan report, or a dictionary with an 'error' key on failure

        Returns:
            True if notification was sent successfully, False otherwise
        """
        pass
