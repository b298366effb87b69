"""
InventoryRegistry - Catalog of documented vocabulary items.

Entries are keyed by (kind, name). The first registration of a key wins;
names referenced before (or without) being documented get a placeholder
entry so the availability compiler can still track them.
"""

import logging
from typing import Optional

from gamecompiler.schemas import (
    BuildMessage,
    InventoryItem,
    InventoryKind,
    Severity,
    namespace_of,
)

logger = logging.getLogger(__name__)


class InventoryRegistry:
    """Registry of InventoryItems for one compilation run."""

    def __init__(self):
        self._items: dict[tuple[InventoryKind, str], InventoryItem] = {}

    def __len__(self) -> int:
        return len(self._items)

    def reset(self):
        self._items.clear()

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def _make_item(
        self,
        kind: InventoryKind,
        name: str,
        display_name: Optional[str] = None,
        category: Optional[str] = None,
        content: str = "",
        placeholder: bool = False,
    ) -> InventoryItem:
        if category is None:
            category = namespace_of(name) if kind == InventoryKind.LEMMA else ""
        return InventoryItem(
            kind=kind,
            name=name,
            display_name=display_name or name,
            category=category,
            content=content,
            placeholder=placeholder,
        )

    def register(
        self,
        kind: InventoryKind,
        name: str,
        display_name: Optional[str] = None,
        category: Optional[str] = None,
        content: str = "",
    ) -> Optional[BuildMessage]:
        """
        Insert a documented item.

        A placeholder left by an earlier reference is replaced by the real
        documentation; a second real registration keeps the first entry.

        Args:
            kind: Vocabulary kind of the item
            name: Canonical name, unique within its kind
            display_name: Name shown to players (defaults to name)
            category: Grouping; lemmas default to their namespace
            content: Documentation text

        Returns:
            A warning if the item was already documented, else None
        """
        existing = self._items.get((kind, name))
        if existing is not None and not existing.placeholder:
            logger.debug(f"Ignoring duplicate {kind.value} doc: {name}")
            return BuildMessage(
                severity=Severity.WARNING,
                text=f"{kind.value.capitalize()} '{name}' is already documented; "
                     f"keeping the first entry",
            )

        self._items[(kind, name)] = self._make_item(kind, name, display_name, category, content)
        return None

    def ensure(
        self,
        kind: InventoryKind,
        name: str,
        template: Optional[str] = None,
    ) -> Optional[BuildMessage]:
        """
        Make sure (kind, name) has an entry.

        Args:
            kind: Vocabulary kind of the item
            name: Canonical name referenced by a declaration
            template: Content to use if the item was never documented

        Returns:
            None if the entry exists. Otherwise the entry is created and a
            warning (placeholder, no template) or an informational note
            (template used as content) is returned.
        """
        if (kind, name) in self._items:
            return None

        if template is not None:
            self._items[(kind, name)] = self._make_item(kind, name, content=template)
            return BuildMessage(
                severity=Severity.INFO,
                text=f"Missing {kind.value} documentation for '{name}'; "
                     f"using the provided description as its content",
            )

        self._items[(kind, name)] = self._make_item(kind, name, placeholder=True)
        return BuildMessage(
            severity=Severity.WARNING,
            text=f"Missing {kind.value} documentation for '{name}'. "
                 f"Add a doc entry for it before it is used",
        )

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def lookup(self, kind: InventoryKind, name: str) -> Optional[InventoryItem]:
        return self._items.get((kind, name))

    def contains(self, kind: InventoryKind, name: str) -> bool:
        return (kind, name) in self._items

    def items(self, kind: InventoryKind) -> list[InventoryItem]:
        """Items of one kind, in registration order."""
        return [item for (k, _), item in self._items.items() if k == kind]

    def all_items(self) -> list[InventoryItem]:
        return list(self._items.values())
