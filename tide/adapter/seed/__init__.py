"""Seed catalog adapter."""

from .source import JsonFileSeedSource, StaticSeedSource

__all__ = ["JsonFileSeedSource", "StaticSeedSource"]
