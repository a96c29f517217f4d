"""
Console notifier adapter - Implements Notifier protocol.

This module provides a console-based implementation of the domain's
notifier port, logging outgoing emails instead of delivering them.
Used when no SMTP host is configured.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleNotifier:
    """
    Implements Notifier protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For development - the HTML body (including verification links) is
    written to the log so the flow can be completed without a mail server.
    """

    def send_email(self, to: str, subject: str, html: str) -> None:
        """
        Log the email at INFO level (simulates delivery).

        Args:
            to: Recipient address
            subject: Subject line
            html: HTML body
        """
        logger.info("[EMAIL] To: %s Subject: %s\n%s", to, subject, html)
