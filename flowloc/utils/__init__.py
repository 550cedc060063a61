"""Utility functions and helpers."""

from .logger import setup_logger, get_logger
from .cache import TranslationCache, get_shared_cache
from .config_loader import load_config, save_config

__all__ = [
    'setup_logger',
    'get_logger',
    'TranslationCache',
    'get_shared_cache',
    'load_config',
    'save_config'
]
