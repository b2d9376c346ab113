"""Filesystem mutations for template, asset and theme events.

Every mutation returns the file name that the commit message should mention.
Templates are written from the event body; assets are downloaded through a
``FileFetcher`` and swapped into place only after the whole body has been
written.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import typing as typ

from themekeeper.events import MissingFieldError

from .errors import TargetNotFoundError
from .layout import ASSETS_DIRNAME, VCS_METADATA_DIRNAME, contained_path

if typ.TYPE_CHECKING:
    from pathlib import Path

    from themekeeper.events import Document

    from .fetcher import FileFetcher

TEMPLATE_FILE_MODE = 0o644
ASSETS_DIR_MODE = 0o755
THEME_FILE_NAME = "theme"


class ThemeMutator:
    """Apply theme changes to a shop working directory."""

    def __init__(self, fetcher: FileFetcher) -> None:
        """Create a mutator that downloads assets through ``fetcher``."""
        self._fetcher = fetcher

    def write_template(self, directory: Path, item: Document) -> str:
        """Overwrite a template file with the item's body.

        Raises
        ------
        MissingFieldError
            If ``file_name`` or ``body`` is absent.
        UnsafePathError
            If ``file_name`` escapes the shop directory.

        """
        file_name = item.get_string("file_name")
        body = item.get_string("body")
        path = contained_path(directory, file_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(body.encode("utf-8"))
        path.chmod(TEMPLATE_FILE_MODE)
        return file_name

    def delete_template(self, directory: Path, payload: Document) -> str:
        """Remove the template named by the payload's ``item_slug``."""
        file_name = payload.get_string("item_slug")
        _remove(contained_path(directory, file_name))
        return file_name

    def write_asset(self, directory: Path, item: Document) -> str:
        """Download an asset into ``assets/``, replacing any previous copy.

        The body is streamed into a hidden sibling file and renamed over the
        destination once complete, so a failed download never leaves a
        truncated asset behind.

        Raises
        ------
        MissingFieldError
            If ``file_name`` or ``_links.file.href`` is absent.
        AssetFetchError
            If the download fails.
        OSError
            If the file cannot be written.

        """
        file_name = item.get_string("file_name")
        href = item.get_string("_links", "file", "href")
        assets_dir = directory / ASSETS_DIRNAME
        path = contained_path(assets_dir, file_name)
        path.parent.mkdir(mode=ASSETS_DIR_MODE, parents=True, exist_ok=True)

        partial = path.with_name(f".{path.name}.part")
        try:
            with self._fetcher.open(href) as chunks, partial.open("wb") as out:
                for chunk in chunks:
                    out.write(chunk)
            os.replace(partial, path)
        except BaseException:
            with contextlib.suppress(FileNotFoundError):
                partial.unlink()
            raise
        return file_name

    def delete_asset(self, directory: Path, payload: Document) -> str:
        """Remove the asset named by the payload's ``item_slug``."""
        file_name = payload.get_string("item_slug")
        _remove(contained_path(directory / ASSETS_DIRNAME, file_name))
        return file_name

    def replace_theme(self, directory: Path, item: Document) -> str:
        """Clear the shop directory and rewrite every template and asset.

        Everything directly under ``directory`` except the git metadata is
        removed first. A theme without an asset collection is written with
        templates only. Failures propagate immediately and leave the
        directory partially rewritten.

        Raises
        ------
        MissingFieldError
            If the template collection is absent or an entry lacks a field.

        """
        templates = item.get_array("_embedded", "templates")
        try:
            assets = item.get_array("_embedded", "assets")
        except MissingFieldError:
            assets = []

        clear_directory(directory)
        for template in templates:
            self.write_template(directory, template)
        for asset in assets:
            self.write_asset(directory, asset)
        return THEME_FILE_NAME


def clear_directory(directory: Path) -> None:
    """Remove every entry directly under ``directory`` except ``.git``."""
    for entry in directory.iterdir():
        if entry.name == VCS_METADATA_DIRNAME:
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


def _remove(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError as exc:
        raise TargetNotFoundError(path) from exc


__all__ = ["THEME_FILE_NAME", "ThemeMutator", "clear_directory"]
