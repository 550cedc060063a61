"""Translation engine implementations."""

from typing import Any, Dict, Optional

from flowloc.core.exceptions import ConfigurationError
from ..base import TranslationEngine
from .google_engine import GoogleEngine
from .deepl_engine import DeeplEngine
from .mock_engine import MockEngine

ENGINE_NAMES = ("google", "deepl", "mock")


def create_engine(name: str, config: Optional[Dict[str, Any]] = None) -> TranslationEngine:
    """
    Build an engine from the ``engines.<name>`` section of the configuration.

    Args:
        name: Engine name (google, deepl, mock)
        config: Full configuration dictionary (see config_loader)

    Returns:
        Engine instance

    Raises:
        ConfigurationError: If the engine name is unknown
    """
    section = ((config or {}).get("engines") or {}).get(name) or {}
    if name == "google":
        return GoogleEngine(
            api_key=section.get("api_key"),
            enabled=bool(section.get("enabled", False)),
            batch_size=section.get("batch_size"),
            timeout=section.get("timeout", 20)
        )
    if name == "deepl":
        return DeeplEngine(
            api_key=section.get("api_key"),
            api_url=section.get("api_url"),
            batch_size=section.get("batch_size"),
            timeout=section.get("timeout", 20)
        )
    if name == "mock":
        return MockEngine(
            delay=float(section.get("delay", 0.0) or 0.0),
            batch_size=section.get("batch_size")
        )
    raise ConfigurationError(
        f"Unknown translation engine: {name}",
        config_key="engine",
        invalid_value=name,
        valid_values=list(ENGINE_NAMES)
    )


__all__ = [
    'TranslationEngine',
    'GoogleEngine',
    'DeeplEngine',
    'MockEngine',
    'ENGINE_NAMES',
    'create_engine'
]
