"""
Unit tests for notifier adapters.

Tests verify both adapters implement the Notifier protocol, that the
console notifier logs the message, and that the SMTP notifier delivers
in the background and only logs failures.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from src.adapters.session.tokens import JwtSessionSigner
from src.adapters.smtp.console import ConsoleNotifier
from src.adapters.smtp.smtp import SmtpNotifier
from src.domain.accounts import AccountService
from src.domain.ports import Notifier
from tests.fakes import InMemoryUserRepository


def accepts_notifier(notifier: Notifier) -> None:
    assert callable(notifier.send_email)


class TestConsoleNotifier:
    def test_implements_notifier_protocol(self) -> None:
        accepts_notifier(ConsoleNotifier())
        assert ConsoleNotifier.__bases__ == (object,)

    def test_logs_email_at_info(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="src.adapters.smtp.console"):
            ConsoleNotifier().send_email("ann@x.com", "Hello", "<a href='link'>go</a>")

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.INFO
        assert "ann@x.com" in record.getMessage()
        assert "Hello" in record.getMessage()
        assert "link" in record.getMessage()


@pytest.fixture
def smtp_notifier() -> SmtpNotifier:
    notifier = SmtpNotifier(
        host="smtp.acceleott.com",
        port=587,
        sender="Acceleott <no-reply@acceleott.com>",
        username="mailer",
        password="app-password",
    )
    yield notifier
    notifier.close()


class TestSmtpNotifier:
    def test_implements_notifier_protocol(self, smtp_notifier: SmtpNotifier) -> None:
        accepts_notifier(smtp_notifier)

    def test_delivers_message(self, smtp_notifier: SmtpNotifier) -> None:
        with patch("src.adapters.smtp.smtp.smtplib.SMTP") as smtp_cls:
            server = smtp_cls.return_value.__enter__.return_value
            smtp_notifier.send_email("ann@x.com", "Confirm", "<p>hi</p>").result(timeout=5)

        smtp_cls.assert_called_once_with("smtp.acceleott.com", 587, timeout=10.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "app-password")
        message = server.send_message.call_args[0][0]
        assert message["To"] == "ann@x.com"
        assert message["Subject"] == "Confirm"
        assert message["From"] == "Acceleott <no-reply@acceleott.com>"
        assert "<p>hi</p>" in message.get_body(preferencelist=("html",)).get_content()

    def test_skips_login_without_credentials(self) -> None:
        notifier = SmtpNotifier(host="localhost", port=25, sender="x@acceleott.com", use_tls=False)
        try:
            with patch("src.adapters.smtp.smtp.smtplib.SMTP") as smtp_cls:
                server = smtp_cls.return_value.__enter__.return_value
                notifier.send_email("ann@x.com", "Hi", "<p>hi</p>").result(timeout=5)
        finally:
            notifier.close()

        server.starttls.assert_not_called()
        server.login.assert_not_called()
        server.send_message.assert_called_once()

    def test_send_returns_before_delivery(self, smtp_notifier: SmtpNotifier) -> None:
        """send_email only queues; the caller never blocks on SMTP."""
        with patch.object(SmtpNotifier, "_deliver", side_effect=lambda message: message["To"]):
            future = smtp_notifier.send_email("ann@x.com", "Hi", "<p>hi</p>")
            assert future.result(timeout=5) == "ann@x.com"

    def test_failure_is_logged_not_raised(
        self, smtp_notifier: SmtpNotifier, caplog: pytest.LogCaptureFixture
    ) -> None:
        with (
            caplog.at_level(logging.ERROR, logger="src.adapters.smtp.smtp"),
            patch("src.adapters.smtp.smtp.smtplib.SMTP", side_effect=OSError("connection refused")),
        ):
            future = smtp_notifier.send_email("ann@x.com", "Hi", "<p>hi</p>")
            smtp_notifier.close()

        assert isinstance(future.exception(), OSError)
        assert any("connection refused" in r.getMessage() for r in caplog.records)

    def test_success_is_logged(
        self, smtp_notifier: SmtpNotifier, caplog: pytest.LogCaptureFixture
    ) -> None:
        with (
            caplog.at_level(logging.INFO, logger="src.adapters.smtp.smtp"),
            patch("src.adapters.smtp.smtp.smtplib.SMTP", MagicMock()),
        ):
            smtp_notifier.send_email("ann@x.com", "Hi", "<p>hi</p>")
            smtp_notifier.close()

        assert any("Email sent to ann@x.com" in r.getMessage() for r in caplog.records)

    def test_delivery_handle_ignored_by_account_service(self, smtp_notifier: SmtpNotifier) -> None:
        """The service discards whatever send_email returns."""
        service = AccountService(
            repository=InMemoryUserRepository(),
            notifier=smtp_notifier,
            session_signer=JwtSessionSigner(secret="s"),
            verify_url_base="http://api.acceleott.com/api/auth/verify",
        )
        with patch.object(SmtpNotifier, "_deliver", return_value="ann@x.com") as deliver:
            user = service.register("Ann", "ann@x.com", "secret1")
            smtp_notifier.close()

        assert user.email == "ann@x.com"
        deliver.assert_called_once()
