"""Map events onto shop working directories.

Layout::

    {base_dir}/{shop_key}/            production theme
    {base_dir}/{shop_key}-dev/        draft theme
    {base_dir}/{shop_key}[-dev]/assets/

"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from themekeeper.events import MissingFieldError

from .errors import MissingShopKeyError, UnsafePathError

if typ.TYPE_CHECKING:
    from themekeeper.events import ThemeEvent

DRAFT_SUFFIX = "-dev"
ASSETS_DIRNAME = "assets"
SHOP_DIR_MODE = 0o700
VCS_METADATA_DIRNAME = ".git"


def is_draft(event: ThemeEvent) -> bool:
    """Return whether the event concerns a non-production theme.

    The ``production`` flag is read from the item itself (theme events) and
    then from its embedded theme (template and asset events). An unreadable
    flag means production.
    """
    for path in (("production",), ("_embedded", "theme", "production")):
        try:
            return not event.item.get_bool(*path)
        except MissingFieldError:
            continue
    return False


def contained_path(root: Path, name: str) -> Path:
    """Join ``name`` under ``root``, refusing names that escape it.

    Names reaching into a ``.git`` directory are refused as well, so payloads
    can never touch repository metadata.

    Raises
    ------
    UnsafePathError
        If ``name`` is empty, absolute, resolves outside ``root`` or reaches
        into a ``.git`` directory.

    """
    if not name or Path(name).is_absolute():
        raise UnsafePathError(name, root)
    candidate = (root / name).resolve()
    resolved_root = root.resolve()
    if candidate == resolved_root or not candidate.is_relative_to(resolved_root):
        raise UnsafePathError(name, root)
    relative = candidate.relative_to(resolved_root)
    if any(part.casefold() == VCS_METADATA_DIRNAME for part in relative.parts):
        raise UnsafePathError(name, root)
    return root / name


def _make_private_dirs(path: Path) -> None:
    """Create ``path`` and any missing ancestors, each with ``SHOP_DIR_MODE``."""
    missing: list[Path] = []
    current = path
    while not current.exists():
        missing.append(current)
        current = current.parent
    for directory in reversed(missing):
        directory.mkdir(mode=SHOP_DIR_MODE, exist_ok=True)


class ShopDirectoryResolver:
    """Resolve and lazily create the working directory for an event's shop."""

    def __init__(self, base_dir: Path) -> None:
        """Bind the resolver to the directory holding all shop trees."""
        self._base_dir = Path(base_dir)

    @property
    def base_dir(self) -> Path:
        """Return the directory holding all shop trees."""
        return self._base_dir

    def path_for(self, event: ThemeEvent) -> Path:
        """Return the shop directory for ``event`` without creating it.

        Raises
        ------
        MissingShopKeyError
            If the event has no shop key.
        UnsafePathError
            If the shop key is not a single plain path component.

        """
        shop_key = event.shop_key
        if not shop_key:
            raise MissingShopKeyError(event.topic)
        if shop_key in {".", ".."} or Path(shop_key).name != shop_key:
            raise UnsafePathError(shop_key, self._base_dir)
        dirname = f"{shop_key}{DRAFT_SUFFIX}" if is_draft(event) else shop_key
        return self._base_dir / dirname

    def resolve(self, event: ThemeEvent) -> Path:
        """Return the shop directory for ``event``, creating it if absent."""
        path = self.path_for(event)
        _make_private_dirs(path)
        return path


__all__ = [
    "ASSETS_DIRNAME",
    "DRAFT_SUFFIX",
    "VCS_METADATA_DIRNAME",
    "ShopDirectoryResolver",
    "contained_path",
    "is_draft",
]
