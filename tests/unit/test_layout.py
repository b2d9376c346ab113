"""Unit tests for shop directory resolution."""

from __future__ import annotations

import stat
import typing as typ

import pytest

from tests.helpers.event_builders import (
    delete_payload,
    event_from,
    template_payload,
    theme_payload,
)
from themekeeper.events import Document, ThemeEvent
from themekeeper.mirror import (
    MissingShopKeyError,
    ShopDirectoryResolver,
    UnsafePathError,
    contained_path,
    is_draft,
)

if typ.TYPE_CHECKING:
    from pathlib import Path


class TestIsDraft:
    """Tests for production/draft detection."""

    @pytest.mark.parametrize(("production", "draft"), [(True, False), (False, True)])
    def test_theme_flag_on_item(self, *, production: bool, draft: bool) -> None:
        """Theme events carry the flag on the item itself."""
        assert is_draft(event_from(theme_payload(production=production))) is draft

    @pytest.mark.parametrize(("production", "draft"), [(True, False), (False, True)])
    def test_theme_flag_on_embedded_theme(
        self, *, production: bool, draft: bool
    ) -> None:
        """Template and asset events carry it on the embedded theme."""
        event = event_from(template_payload(production=production))
        assert is_draft(event) is draft

    def test_item_flag_wins_over_embedded_theme(self) -> None:
        """The item's own flag is consulted first."""
        item = Document(
            {"production": True, "_embedded": {"theme": {"production": False}}}
        )
        assert is_draft(ThemeEvent(topic="themes.updated", item=item)) is False

    def test_missing_flag_means_production(self) -> None:
        """An absent flag defaults to production."""
        assert is_draft(event_from(template_payload())) is False
        assert is_draft(
            event_from(delete_payload("themes.updated.assets.deleted", "a.png"))
        ) is False

    def test_unreadable_flag_means_production(self) -> None:
        """A non-boolean flag defaults to production."""
        item = Document({"production": "no"})
        assert is_draft(ThemeEvent(topic="themes.updated", item=item)) is False


class TestShopDirectoryResolver:
    """Tests for ShopDirectoryResolver."""

    def test_production_directory(self, base_dir: Path) -> None:
        """Production themes live under the bare shop key."""
        path = ShopDirectoryResolver(base_dir).resolve(event_from(template_payload()))

        assert path == base_dir / "acme"
        assert path.is_dir()

    def test_draft_directory(self, base_dir: Path) -> None:
        """Draft themes get a -dev suffix."""
        event = event_from(theme_payload(production=False))
        path = ShopDirectoryResolver(base_dir).resolve(event)

        assert path == base_dir / "acme-dev"
        assert path.is_dir()
        assert not (base_dir / "acme").exists()

    def test_creates_missing_ancestors_owner_only(self, tmp_path: Path) -> None:
        """The shop directory and its ancestors are created lazily."""
        resolver = ShopDirectoryResolver(tmp_path / "deep" / "base")
        path = resolver.resolve(event_from(template_payload()))

        assert path.is_dir(), "shop directory should exist"
        for created in (tmp_path / "deep", tmp_path / "deep" / "base", path):
            mode = stat.S_IMODE(created.stat().st_mode)
            assert mode & 0o077 == 0, f"{created} has mode {oct(mode)}"

    def test_existing_ancestors_keep_their_mode(self, tmp_path: Path) -> None:
        """Only directories the resolver creates are made owner-only."""
        tmp_path.chmod(0o755)
        ShopDirectoryResolver(tmp_path).resolve(event_from(template_payload()))
        assert stat.S_IMODE(tmp_path.stat().st_mode) == 0o755

    def test_resolve_is_idempotent(self, base_dir: Path) -> None:
        """Resolving twice returns the same existing directory."""
        resolver = ShopDirectoryResolver(base_dir)
        event = event_from(template_payload())
        assert resolver.resolve(event) == resolver.resolve(event)

    def test_missing_shop_key(self, base_dir: Path) -> None:
        """Events without a shop cannot be placed."""
        event = event_from(template_payload(shop=None))
        with pytest.raises(MissingShopKeyError, match="themes.updated.templates"):
            ShopDirectoryResolver(base_dir).resolve(event)
        assert list(base_dir.iterdir()) == []

    @pytest.mark.parametrize("shop", ["..", ".", "acme/other", "../escape"])
    def test_unsafe_shop_key(self, base_dir: Path, shop: str) -> None:
        """Shop keys must be a single plain path component."""
        with pytest.raises(UnsafePathError):
            ShopDirectoryResolver(base_dir).path_for(
                event_from(template_payload(shop=shop))
            )


class TestContainedPath:
    """Tests for contained_path."""

    def test_nested_name(self, tmp_path: Path) -> None:
        """Nested relative names stay under the root."""
        assert contained_path(tmp_path, "layouts/theme.html") == (
            tmp_path / "layouts" / "theme.html"
        )

    @pytest.mark.parametrize("name", ["", "/etc/passwd", "../x", "a/../../x", "."])
    def test_rejects_escaping_names(self, tmp_path: Path, name: str) -> None:
        """Names resolving outside (or onto) the root are refused."""
        with pytest.raises(UnsafePathError):
            contained_path(tmp_path, name)

    @pytest.mark.parametrize(
        "name",
        [
            ".git",
            ".git/config",
            ".git/hooks/pre-commit",
            "a/../.git/HEAD",
            ".GIT/config",
        ],
    )
    def test_rejects_git_metadata(self, tmp_path: Path, name: str) -> None:
        """Names inside the repository metadata directory are refused."""
        (tmp_path / ".git").mkdir()
        with pytest.raises(UnsafePathError):
            contained_path(tmp_path, name)

    def test_allows_names_merely_containing_git(self, tmp_path: Path) -> None:
        """Only an exact ``.git`` component is reserved."""
        assert contained_path(tmp_path, "snippets/.gitkeep") == (
            tmp_path / "snippets" / ".gitkeep"
        )
