"""
SMTP notifier adapter - Implements Notifier protocol.

Delivery runs on a small thread pool so send_email returns as soon as
the message is queued. Failures are logged from the future's callback
and never reach the request that triggered them.
"""

import logging
import smtplib
from concurrent.futures import Future, ThreadPoolExecutor
from email.message import EmailMessage

logger = logging.getLogger(__name__)


class SmtpNotifier:
    """
    Implements Notifier protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Each message opens its own SMTP connection; the executor bounds how
    many are open at once.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 10.0,
        max_workers: int = 4,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="smtp")

    def send_email(self, to: str, subject: str, html: str) -> Future:
        """
        Queue an HTML email for delivery and return immediately.

        Returns:
            The delivery future (callers are not expected to wait on it)
        """
        message = self._build_message(to, subject, html)
        future = self._executor.submit(self._deliver, message)
        future.add_done_callback(self._log_outcome)
        return future

    def close(self) -> None:
        """Wait for queued deliveries, then stop the worker threads."""
        self._executor.shutdown(wait=True)

    def _build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> str:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
            if self._use_tls:
                server.starttls()
            if self._username and self._password:
                server.login(self._username, self._password)
            server.send_message(message)
        return message["To"]

    @staticmethod
    def _log_outcome(future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.error(
                "Email delivery failed: %s: %s",
                type(error).__name__,
                error,
            )
            return
        logger.info("Email sent to %s", future.result())
