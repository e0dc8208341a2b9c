"""
Tests pour la configuration verrouillable.
"""

import pytest

from caption_translator.config import ConfigBase


class SampleConfig(ConfigBase):
    value: int = 1


def test_singleton():
    assert SampleConfig() is SampleConfig()


def test_locked_config_rejects_changes():
    config = SampleConfig()
    config.lock()
    config.lock()

    with pytest.raises(AttributeError):
        config.value = 2

    assert config.value == 1
