"""
systemd supervisor notifications
"""

import sdnotify
import structlog

logger = structlog.get_logger(__name__)


class Supervisor:
    """Sends sd_notify messages; silently a no-op when not run by systemd"""

    def __init__(self, notifier: sdnotify.SystemdNotifier = None):
        self.notifier = notifier or sdnotify.SystemdNotifier()

    def ready(self):
        logger.info("Notifying supervisor: ready")
        self.notifier.notify("READY=1")

    def watchdog(self):
        logger.debug("Notifying supervisor: watchdog")
        self.notifier.notify("WATCHDOG=1")
