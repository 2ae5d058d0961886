"""Wardrobe Invariant Guard: every reserved-name rule, in one place.

Invariants:
    - Every user owns wardrobes named exactly "Your Dresses", "Your Outfits"
      and "Your Favorites" once signup completes
    - Reserved wardrobes are never renamed or deleted
    - Links in "Your Dresses" / "Your Outfits" are only removed by the full
      document delete path, never by an explicit unlink
    - A user never owns two wardrobes with the same reserved name
    - Listing a user's wardrobes without "Your Dresses" is a data-integrity failure

Design Decisions:
    - Pure class, no IO: callers fetch rows and hand them in, the guard only
      decides (functional core, imperative shell)
    - Accepts any object with .id and .name so ORM rows and test stubs both work
    - The guard never repairs; it raises and the caller surfaces the failure
"""

from typing import Iterable, Protocol

from wardrobe_api.core.domain_types import DocumentKind
from wardrobe_api.core.errors import (
    DuplicateReservedWardrobeError,
    MissingDefaultWardrobeError,
    ReservedWardrobeError,
)

DRESSES_WARDROBE = "Your Dresses"
OUTFITS_WARDROBE = "Your Outfits"
FAVORITES_WARDROBE = "Your Favorites"

# Creation order at signup; also the initial position order
RESERVED_WARDROBE_NAMES: tuple[str, ...] = (
    DRESSES_WARDROBE, OUTFITS_WARDROBE, FAVORITES_WARDROBE,
)

UNLINK_PROTECTED_NAMES = frozenset({DRESSES_WARDROBE, OUTFITS_WARDROBE})

_DEFAULT_BY_KIND = {
    DocumentKind.DRESS: DRESSES_WARDROBE,
    DocumentKind.OUTFIT: OUTFITS_WARDROBE,
}


class NamedWardrobe(Protocol):
    id: object
    name: str


class WardrobeInvariantGuard:
    """Decides whether a wardrobe mutation may proceed."""

    @staticmethod
    def is_reserved(name: str | None) -> bool:
        return name in RESERVED_WARDROBE_NAMES

    @staticmethod
    def default_name_for(kind: DocumentKind) -> str:
        """Wardrobe every new document of this kind is linked to."""
        return _DEFAULT_BY_KIND[kind]

    def check_create(
        self, name: str, user_id: object, existing_names: Iterable[str],
    ) -> None:
        if self.is_reserved(name) and name in set(existing_names):
            raise DuplicateReservedWardrobeError(name, user_id)

    def check_update(
        self, wardrobe: NamedWardrobe, changes: dict,
        user_id: object, existing_names: Iterable[str],
    ) -> None:
        """Metadata changes are always allowed; renames are not, for reserved rows."""
        new_name = changes.get("name")
        if new_name is None or new_name == wardrobe.name:
            return
        if self.is_reserved(wardrobe.name):
            raise ReservedWardrobeError(wardrobe.name, "rename", wardrobe.id)
        self.check_create(new_name, user_id, existing_names)

    def check_delete(self, wardrobe: NamedWardrobe) -> None:
        if self.is_reserved(wardrobe.name):
            raise ReservedWardrobeError(wardrobe.name, "delete", wardrobe.id)

    def check_unlink(self, wardrobe: NamedWardrobe) -> None:
        if wardrobe.name in UNLINK_PROTECTED_NAMES:
            raise ReservedWardrobeError(
                wardrobe.name, "remove items from", wardrobe.id,
            )

    def require_default(
        self, wardrobes: Iterable[NamedWardrobe], user_id: object,
    ) -> None:
        """Read-path guard: detect users left half-bootstrapped."""
        if not any(w.name == DRESSES_WARDROBE for w in wardrobes):
            raise MissingDefaultWardrobeError(user_id, DRESSES_WARDROBE)


WARDROBE_GUARD = WardrobeInvariantGuard()
