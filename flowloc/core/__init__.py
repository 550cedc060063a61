"""Core models, paths, errors and the translation pipeline."""
