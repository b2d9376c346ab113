"""Filesystem mirroring: shop directory layout, asset fetch and mutations."""

from __future__ import annotations

from .errors import (
    AssetFetchError,
    MirrorError,
    MissingShopKeyError,
    TargetNotFoundError,
    UnsafePathError,
)
from .fetcher import FileFetcher, HttpxFileFetcher
from .handlers import THEME_FILE_NAME, ThemeMutator, clear_directory
from .layout import ShopDirectoryResolver, contained_path, is_draft

__all__ = [
    "THEME_FILE_NAME",
    "AssetFetchError",
    "FileFetcher",
    "HttpxFileFetcher",
    "MirrorError",
    "MissingShopKeyError",
    "ShopDirectoryResolver",
    "TargetNotFoundError",
    "ThemeMutator",
    "UnsafePathError",
    "clear_directory",
    "contained_path",
    "is_draft",
]
