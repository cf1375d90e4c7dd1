"""Unit tests for configuration management."""

import pytest

from scentlab.utils.config import Config


class TestConfigInitialization:
    """Test Config class initialization and environment variable loading."""

    def test_config_loads_default_values(self, monkeypatch):
        """Test that Config uses default values when env vars not set."""
        monkeypatch.delenv("CATALOG_PATH", raising=False)
        monkeypatch.delenv("DEFAULT_RETENTION_PERCENTAGE", raising=False)
        monkeypatch.delenv("OUTPUT_FORMAT", raising=False)
        monkeypatch.delenv("AMOUNT_UNIT", raising=False)

        config = Config()

        assert config.CATALOG_PATH is None
        assert config.DEFAULT_RETENTION_PERCENTAGE == 50
        assert config.OUTPUT_FORMAT == "markdown"
        assert config.AMOUNT_UNIT == "g"

    def test_config_loads_from_environment(self, monkeypatch, tmp_path):
        """Test that Config loads values from environment variables."""
        catalog = tmp_path / "personas.json"
        catalog.write_text('{"personas": []}', encoding="utf-8")
        monkeypatch.setenv("CATALOG_PATH", str(catalog))
        monkeypatch.setenv("DEFAULT_RETENTION_PERCENTAGE", "70")
        monkeypatch.setenv("OUTPUT_FORMAT", "JSON")
        monkeypatch.setenv("AMOUNT_UNIT", " g")

        config = Config()

        assert config.CATALOG_PATH == str(catalog)
        assert config.DEFAULT_RETENTION_PERCENTAGE == 70
        assert config.OUTPUT_FORMAT == "json"
        assert config.AMOUNT_UNIT == " g"

    def test_config_converts_numeric_types(self, monkeypatch):
        """Test that Config properly converts numeric environment variables."""
        monkeypatch.setenv("DEFAULT_RETENTION_PERCENTAGE", "20")

        config = Config()

        assert isinstance(config.DEFAULT_RETENTION_PERCENTAGE, int)

    def test_empty_catalog_path_is_none(self, monkeypatch):
        """An empty CATALOG_PATH means the built-in catalog."""
        monkeypatch.setenv("CATALOG_PATH", "")

        assert Config().CATALOG_PATH is None


class TestConfigValidation:
    """Test Config validation logic."""

    def test_validate_succeeds_with_defaults(self, monkeypatch):
        monkeypatch.delenv("CATALOG_PATH", raising=False)
        monkeypatch.delenv("DEFAULT_RETENTION_PERCENTAGE", raising=False)
        monkeypatch.delenv("OUTPUT_FORMAT", raising=False)

        Config().validate()  # Should not raise

    @pytest.mark.parametrize("value", ["-1", "101"])
    def test_validate_rejects_retention_out_of_range(self, monkeypatch, value):
        monkeypatch.setenv("DEFAULT_RETENTION_PERCENTAGE", value)

        config = Config()
        with pytest.raises(ValueError, match="DEFAULT_RETENTION_PERCENTAGE"):
            config.validate()

    @pytest.mark.parametrize("value", ["0", "100"])
    def test_validate_accepts_retention_bounds(self, monkeypatch, value):
        monkeypatch.setenv("DEFAULT_RETENTION_PERCENTAGE", value)

        Config().validate()  # Should not raise

    def test_validate_rejects_unknown_output_format(self, monkeypatch):
        monkeypatch.setenv("OUTPUT_FORMAT", "yaml")

        config = Config()
        with pytest.raises(ValueError, match="OUTPUT_FORMAT"):
            config.validate()

    def test_validate_rejects_blank_amount_unit(self, monkeypatch):
        monkeypatch.setenv("AMOUNT_UNIT", "  ")

        config = Config()
        with pytest.raises(ValueError, match="AMOUNT_UNIT"):
            config.validate()

    def test_validate_rejects_missing_catalog_file(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CATALOG_PATH", str(tmp_path / "missing.json"))

        config = Config()
        with pytest.raises(ValueError, match="CATALOG_PATH"):
            config.validate()

    def test_non_numeric_retention_raises_on_init(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_RETENTION_PERCENTAGE", "half")

        with pytest.raises(ValueError):
            Config()


class TestModuleLevelConfig:
    """Test module-level config instance."""

    def test_config_is_importable(self):
        from scentlab.utils.config import config

        assert isinstance(config, Config)

    def test_module_config_is_valid(self):
        from scentlab.utils.config import config

        config.validate()  # Should not raise
