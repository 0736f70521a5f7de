"""Resolução de conexões entre blocos."""

from flow.resolver.edges import resolve_edge

__all__ = ["resolve_edge"]
