"""Supported languages and per-API language codes."""

from typing import Dict, List

SUPPORTED_LANGUAGES: List[Dict[str, str]] = [
    {"code": "ja", "name": "Japanese", "native_name": "日本語"},
    {"code": "en", "name": "English", "native_name": "English"},
    {"code": "zh", "name": "Chinese", "native_name": "中文"},
    {"code": "ko", "name": "Korean", "native_name": "한국어"},
    {"code": "es", "name": "Spanish", "native_name": "Español"},
    {"code": "fr", "name": "French", "native_name": "Français"},
    {"code": "de", "name": "German", "native_name": "Deutsch"},
]

LANGUAGE_CODES = {
    "google": {
        "ja": "ja",
        "en": "en",
        "zh": "zh-CN",
        "ko": "ko",
        "es": "es",
        "fr": "fr",
        "de": "de"
    },
    "deepl": {
        "ja": "JA",
        "en": "EN",
        "zh": "ZH",
        "ko": "KO",
        "es": "ES",
        "fr": "FR",
        "de": "DE"
    }
}


def get_supported_languages() -> List[Dict[str, str]]:
    """List of languages offered as translation targets."""
    return [dict(language) for language in SUPPORTED_LANGUAGES]


def convert_language_code(code: str, api: str) -> str:
    """Map a language code to the form a given API expects; unknown codes pass through."""
    return LANGUAGE_CODES.get(api, {}).get(code.lower(), code)
