"""Themekeeper: mirror theme editor webhooks into per-shop git repositories."""

__version__ = "0.1.0"
