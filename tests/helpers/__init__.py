"""Shared test helpers for Themekeeper."""
