"""Unit tests for configuration loading."""

import pytest
import yaml

from flowloc.core.exceptions import ConfigurationError
from flowloc.core.pipeline import PipelineConfig, WorkflowTranslationPipeline
from flowloc.utils.config_loader import (
    load_config,
    save_config,
    merge_config,
    override_with_env,
    get_default_config
)

ENV_VARS = [
    "GOOGLE_TRANSLATE_API_KEY",
    "FLOWLOC_GOOGLE_ENABLED",
    "DEEPL_API_KEY",
    "DEEPL_API_URL",
    "FLOWLOC_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so values loaded from .env files are undone after each test
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


class TestLoadConfig:
    """Test YAML loading and merging."""

    def test_file_merged_over_defaults(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.dump({"translation": {"target_lang": "fr"}}))

        config = load_config(str(config_file), env_file=None)

        assert config["translation"]["target_lang"] == "fr"
        assert config["translation"]["source_lang"] == "en"
        assert config["engines"]["deepl"]["batch_size"] == 50

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_config(str(config_file), env_file=None) == get_default_config()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"), env_file=None)

    def test_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("DEEPL_API_KEY=from-dotenv:fx\n")
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        config = load_config(str(config_file), env_file=str(env_file))
        assert config["engines"]["deepl"]["api_key"] == "from-dotenv:fx"

    def test_save_and_reload(self, tmp_path):
        config = get_default_config()
        config["translation"]["default_engine"] = "deepl"
        path = tmp_path / "nested" / "saved.yaml"
        save_config(config, str(path))

        assert load_config(str(path), env_file=None)["translation"]["default_engine"] == "deepl"


class TestEnvOverrides:
    """Test environment variable overrides."""

    def test_api_keys(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_TRANSLATE_API_KEY", "g-key")
        monkeypatch.setenv("DEEPL_API_KEY", "d-key")
        config = override_with_env(get_default_config())

        assert config["engines"]["google"]["api_key"] == "g-key"
        assert config["engines"]["deepl"]["api_key"] == "d-key"

    @pytest.mark.parametrize("value,expected", [("true", True), ("1", True), ("no", False)])
    def test_google_enabled_flag(self, monkeypatch, value, expected):
        monkeypatch.setenv("FLOWLOC_GOOGLE_ENABLED", value)
        assert override_with_env(get_default_config())["engines"]["google"]["enabled"] is expected

    def test_creates_missing_sections(self, monkeypatch):
        monkeypatch.setenv("FLOWLOC_LOG_LEVEL", "DEBUG")
        assert override_with_env({}) == {"logging": {"level": "DEBUG"}}


def test_merge_config_is_recursive():
    merged = merge_config({"a": {"b": 1, "c": 2}, "d": 3}, {"a": {"b": 10}})
    assert merged == {"a": {"b": 10, "c": 2}, "d": 3}


class TestPipelineConfig:
    """Test pipeline settings built from configuration."""

    def test_from_dict(self):
        config = get_default_config()
        config["translation"].update({"default_engine": "deepl", "target_lang": "de"})
        config["engines"]["deepl"]["api_key"] = "abc:fx"
        pipeline_config = PipelineConfig.from_dict(config)

        assert pipeline_config.engine == "deepl"
        assert pipeline_config.target_lang == "de"
        assert pipeline_config.deepl_api_key == "abc:fx"
        assert pipeline_config.google_batch_size == 100
        assert not pipeline_config.use_private_cache

    def test_engine_timeouts_and_mock_batch(self):
        config = get_default_config()
        config["engines"]["deepl"]["timeout"] = 5
        config["engines"]["mock"]["batch_size"] = 3
        pipeline_config = PipelineConfig.from_dict(config)

        assert pipeline_config.deepl_timeout == 5
        assert pipeline_config.google_timeout == 20
        assert pipeline_config.mock_batch_size == 3

    @pytest.mark.parametrize("settings", [{"cache_max_size": 10}, {"cache_use_disk": True}])
    def test_cache_settings_imply_private_cache(self, settings):
        assert PipelineConfig(**settings).use_private_cache

    def test_mock_batch_size_validated(self):
        assert len(PipelineConfig(mock_batch_size=0).validate()) == 1

    def test_valid_defaults(self):
        assert PipelineConfig().validate() == []

    def test_issues(self):
        issues = PipelineConfig(engine="babelfish", target_lang="", google_batch_size=0).validate()
        assert len(issues) == 3

    def test_pipeline_rejects_unknown_engine(self):
        with pytest.raises(ConfigurationError) as exc_info:
            WorkflowTranslationPipeline(PipelineConfig(engine="babelfish"))
        assert exc_info.value.config_key == "engine"
