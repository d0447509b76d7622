"""Unit tests for BloomConfig and its TOML loader."""

import pytest

from blooming.core.config import BloomConfig, load_config
from blooming.core.errors import InvalidArgumentError


def test_config_defaults():
    """Test defaults match the standard filter setup."""
    config = BloomConfig()
    assert config.hash_name == "sha512"
    assert config.saturation_threshold == 0.5
    assert config.digest_bits == 512


@pytest.mark.parametrize("hash_name, bits", [("sha256", 256), ("sha1", 160), ("blake2b", 512)])
def test_config_digest_bits(hash_name, bits):
    """Test digest width follows the chosen algorithm."""
    assert BloomConfig(hash_name=hash_name).digest_bits == bits


def test_config_unknown_hash():
    """Test unknown algorithms are rejected."""
    with pytest.raises(InvalidArgumentError, match="Unknown hash algorithm"):
        BloomConfig(hash_name="nope")


def test_config_variable_length_hash():
    """Test XOFs without a fixed digest size are rejected."""
    with pytest.raises(InvalidArgumentError, match="no fixed digest size"):
        BloomConfig(hash_name="shake_128")


@pytest.mark.parametrize("threshold", [0.0, 1.0, -0.5, 2])
def test_config_threshold_range(threshold):
    """Test the saturation threshold must lie strictly between 0 and 1."""
    with pytest.raises(InvalidArgumentError):
        BloomConfig(saturation_threshold=threshold)


def test_load_config(tmp_path):
    """Test values are read from the [bloom] table."""
    path = tmp_path / "bloom.toml"
    path.write_text('[bloom]\nhash_name = "sha256"\nsaturation_threshold = 0.4\n', encoding="utf-8")

    config = load_config(path)
    assert config == BloomConfig(hash_name="sha256", saturation_threshold=0.4)


def test_load_config_without_table(tmp_path):
    """Test a file with no [bloom] table yields defaults."""
    path = tmp_path / "other.toml"
    path.write_text('[unrelated]\nkey = 1\n', encoding="utf-8")
    assert load_config(path) == BloomConfig()


def test_load_config_unknown_key(tmp_path):
    """Test unknown keys are reported."""
    path = tmp_path / "bloom.toml"
    path.write_text("[bloom]\nbits = 64\n", encoding="utf-8")
    with pytest.raises(InvalidArgumentError, match="Unknown config keys"):
        load_config(path)


def test_load_config_missing_file(tmp_path):
    """Test a missing file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.toml")
