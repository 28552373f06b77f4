"""Tests for best-effort booking notifications."""

import logging
from dataclasses import replace

from barbershop import notifications
from barbershop.config import AppConfig, EmailConfig
from barbershop.notifications import notify_booking_created, notify_booking_status, send_email
from tests.conftest import add_booking, add_service, add_user


def _smtp_config(operator=None):
    email = replace(EmailConfig(), smtp_host="smtp.test", operator_address=operator)
    return replace(AppConfig(), email=email)


class FakeSMTP:
    sent = []

    def __init__(self, host, port, timeout=None):
        self.host = host

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def starttls(self, context=None):
        pass

    def login(self, user, password):
        pass

    def sendmail(self, sender, recipients, message):
        FakeSMTP.sent.append((sender, recipients, message))


class BrokenSMTP(FakeSMTP):
    def sendmail(self, sender, recipients, message):
        raise OSError("connection reset")


class TestSendEmail:
    def test_logs_only_without_smtp(self, caplog):
        config = replace(AppConfig(), email=replace(EmailConfig(), smtp_host=None))
        with caplog.at_level(logging.INFO):
            assert send_email("a@example.com", "Hi", "body", config) is False
        assert "SMTP not configured" in caplog.text

    def test_sends_over_smtp(self, monkeypatch):
        FakeSMTP.sent = []
        monkeypatch.setattr(notifications.smtplib, "SMTP", FakeSMTP)

        assert send_email("a@example.com", "Hi", "body", _smtp_config()) is True
        sender, recipients, message = FakeSMTP.sent[0]
        assert recipients == ["a@example.com"]
        assert "Subject: Hi" in message


class TestNotifyBooking:
    def test_created_emails_customer_and_operator(self, engine, session, monkeypatch):
        FakeSMTP.sent = []
        monkeypatch.setattr(notifications.smtplib, "SMTP", FakeSMTP)
        service = add_service(session, "Skin fade")
        customer = add_user(session, name="Sam")
        booking = add_booking(session, service, customer, "09:00", "09:30")

        notify_booking_created(booking.id, bind=engine, config=_smtp_config("boss@example.com"))

        recipients = [r for _, r, _ in FakeSMTP.sent]
        assert recipients == [["customer@example.com"], ["boss@example.com"]]
        assert "Booking received - Skin fade" in FakeSMTP.sent[0][2]

    def test_cancellation_includes_reason(self, engine, session, monkeypatch):
        FakeSMTP.sent = []
        monkeypatch.setattr(notifications.smtplib, "SMTP", FakeSMTP)
        service = add_service(session)
        customer = add_user(session)
        booking = add_booking(session, service, customer, "09:00", "09:30", status="cancelled")

        notify_booking_status(booking.id, "Barber sick", bind=engine, config=_smtp_config())

        assert len(FakeSMTP.sent) == 1
        assert "Reason: Barber sick" in FakeSMTP.sent[0][2]

    def test_completed_sends_nothing(self, engine, session, monkeypatch):
        FakeSMTP.sent = []
        monkeypatch.setattr(notifications.smtplib, "SMTP", FakeSMTP)
        service = add_service(session)
        customer = add_user(session)
        booking = add_booking(session, service, customer, "09:00", "09:30", status="completed")

        notify_booking_status(booking.id, bind=engine, config=_smtp_config())
        assert FakeSMTP.sent == []

    def test_smtp_failure_is_swallowed(self, engine, session, monkeypatch, caplog):
        monkeypatch.setattr(notifications.smtplib, "SMTP", BrokenSMTP)
        service = add_service(session)
        customer = add_user(session)
        booking = add_booking(session, service, customer, "09:00", "09:30")

        notify_booking_created(booking.id, bind=engine, config=_smtp_config())
        assert f"Notification for booking {booking.id} failed" in caplog.text

    def test_missing_booking(self, engine, caplog):
        notify_booking_created(12345, bind=engine)
        assert "no longer exists" in caplog.text
