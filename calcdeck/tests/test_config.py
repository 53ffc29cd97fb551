"""Tests for environment-driven settings."""

from calcdeck.config import Settings, load_settings
from calcdeck.models import UnitSystem


def test_defaults():
    assert load_settings({}) == Settings()


def test_from_env():
    settings = load_settings({
        "CALCDECK_UNIT": "Imperial",
        "CALCDECK_DECIMALS": "4",
        "CALCDECK_COMPOUND_FREQUENCY": "365",
        "CALCDECK_STRICT": "yes",
    })
    assert settings.unit is UnitSystem.IMPERIAL
    assert settings.decimals == 4
    assert settings.compound_frequency == 365
    assert settings.strict is True


def test_bad_values_fall_back():
    settings = load_settings({
        "CALCDECK_UNIT": "furlongs",
        "CALCDECK_DECIMALS": "many",
        "CALCDECK_COMPOUND_FREQUENCY": "0",
        "CALCDECK_STRICT": "maybe",
    })
    assert settings == Settings()
