"""Reintegration of translations into workflow documents."""

from .reintegrator import Reintegrator, IntegrationReport, integrate, ensure_unique_node_ids

__all__ = ['Reintegrator', 'IntegrationReport', 'integrate', 'ensure_unique_node_ids']
