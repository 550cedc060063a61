"""Configuration loading and management."""

import copy
import os
from pathlib import Path
from typing import Dict, Any, Optional

import yaml
from dotenv import load_dotenv


def load_config(config_path: Optional[str] = None, env_file: Optional[str] = ".env") -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Values from the file are merged over the defaults, then environment
    variables (optionally read from a .env file) override both.

    Args:
        config_path: Path to config file (defaults to configs/default.yaml)
        env_file: .env file to load before reading the environment (None to skip)

    Returns:
        Configuration dictionary
    """
    if env_file and Path(env_file).exists():
        load_dotenv(env_file, override=False)

    config = get_default_config()

    if config_path is None:
        possible_paths = [
            Path("configs/default.yaml"),
            Path(__file__).parent.parent.parent / "configs" / "default.yaml"
        ]
        for path in possible_paths:
            if path.exists():
                config_path = str(path)
                break

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
        config = merge_config(config, loaded)

    return override_with_env(config)


def save_config(config: Dict[str, Any], config_path: str) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        config_path: Output path
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def override_with_env(config: Dict[str, Any]) -> Dict[str, Any]:
    """Override config with environment variables."""
    env_mappings = {
        "GOOGLE_TRANSLATE_API_KEY": (["engines", "google", "api_key"], str),
        "FLOWLOC_GOOGLE_ENABLED": (["engines", "google", "enabled"], _as_bool),
        "DEEPL_API_KEY": (["engines", "deepl", "api_key"], str),
        "DEEPL_API_URL": (["engines", "deepl", "api_url"], str),
        "FLOWLOC_LOG_LEVEL": (["logging", "level"], str),
    }

    for env_var, (path, convert) in env_mappings.items():
        value = os.getenv(env_var)
        if value:
            current = config
            for key in path[:-1]:
                if key not in current or not isinstance(current[key], dict):
                    current[key] = {}
                current = current[key]
            current[path[-1]] = convert(value)

    return config


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        "translation": {
            "default_engine": "google",
            "source_lang": "en",
            "target_lang": "ja"
        },
        "engines": {
            "google": {
                "api_key": None,
                "enabled": False,
                "batch_size": 100,
                "timeout": 20
            },
            "deepl": {
                "api_key": None,
                "api_url": None,
                "batch_size": 50,
                "timeout": 20
            },
            "mock": {
                "delay": 0.0,
                "batch_size": 100
            }
        },
        "cache": {
            "max_size": None,
            "use_disk": False,
            "cache_dir": ".cache/flowloc"
        },
        "logging": {
            "level": "INFO",
            "file": None
        }
    }
