"""Configuration package."""

from stlc.config.settings import CalculusSettings, LogProfile, load_settings

__all__ = [
    "CalculusSettings",
    "LogProfile",
    "load_settings",
]
