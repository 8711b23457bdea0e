"""Tests for settings validation."""

import pytest

from app.core.config import Settings, validate_settings


class TestValidateSettings:
    def test_static_defaults_are_valid(self):
        validate_settings(Settings(DATASET_SOURCE="static"))

    def test_supabase_requires_credentials(self):
        settings = Settings(DATASET_SOURCE="supabase", SUPABASE_URL="", SUPABASE_KEY="")
        with pytest.raises(ValueError, match="SUPABASE_URL.*SUPABASE_KEY"):
            validate_settings(settings)

    def test_http_requires_url(self):
        with pytest.raises(ValueError, match="DATASET_URL"):
            validate_settings(Settings(DATASET_SOURCE="http", DATASET_URL=""))

    def test_unknown_source(self):
        with pytest.raises(ValueError, match="DATASET_SOURCE"):
            validate_settings(Settings(DATASET_SOURCE="ftp"))

    def test_negative_submit_delay(self):
        with pytest.raises(ValueError, match="SUBMIT_DELAY_MS"):
            validate_settings(Settings(DATASET_SOURCE="static", SUBMIT_DELAY_MS=-1))
