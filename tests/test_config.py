"""Tests for configuration loading and validation."""

from dataclasses import replace
from datetime import datetime, timezone

import pytest

from barbershop.config import (
    AppConfig,
    AuthConfig,
    EmailConfig,
    ShopConfig,
    _safe_int,
    _validate_config,
    shop_now,
)


class TestConfigValidation:
    def test_default_config_passes_validation(self):
        _validate_config(AppConfig())  # should not raise

    def test_token_expiry_must_be_positive(self):
        config = replace(AppConfig(), auth=replace(AuthConfig(), access_token_expire_minutes=0))
        with pytest.raises(ValueError, match="ACCESS_TOKEN_EXPIRE_MINUTES"):
            _validate_config(config)

    def test_upcoming_days_range(self):
        config = replace(AppConfig(), shop=replace(ShopConfig(), upcoming_days=90))
        with pytest.raises(ValueError, match="UPCOMING_DAYS"):
            _validate_config(config)

    def test_preview_slots_positive(self):
        config = replace(AppConfig(), shop=replace(ShopConfig(), upcoming_preview_slots=0))
        with pytest.raises(ValueError, match="UPCOMING_PREVIEW_SLOTS"):
            _validate_config(config)

    def test_smtp_port_range(self):
        config = replace(AppConfig(), email=replace(EmailConfig(), smtp_port=70000))
        with pytest.raises(ValueError, match="SMTP_PORT"):
            _validate_config(config)

    def test_unknown_timezone(self):
        config = replace(AppConfig(), shop=replace(ShopConfig(), timezone="Mars/Olympus"))
        with pytest.raises(ValueError, match="SHOP_TIMEZONE"):
            _validate_config(config)


class TestSafeInt:
    def test_reads_env(self, monkeypatch):
        monkeypatch.setenv("TEST_SAFE_INT", "12")
        assert _safe_int("TEST_SAFE_INT", "3") == 12

    def test_default(self, monkeypatch):
        monkeypatch.delenv("TEST_SAFE_INT", raising=False)
        assert _safe_int("TEST_SAFE_INT", "3") == 3

    def test_bad_value(self, monkeypatch):
        monkeypatch.setenv("TEST_SAFE_INT", "ten")
        with pytest.raises(ValueError, match="TEST_SAFE_INT"):
            _safe_int("TEST_SAFE_INT", "3")


class TestShopNow:
    def test_is_naive(self):
        assert shop_now().tzinfo is None

    def test_uses_shop_timezone(self):
        config = replace(AppConfig(), shop=replace(ShopConfig(), timezone="UTC"))
        delta = abs(shop_now(config) - datetime.now(timezone.utc).replace(tzinfo=None))
        assert delta.total_seconds() < 5
