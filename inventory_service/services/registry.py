"""
In-memory inventory registry.

Owns the item collection and the id counter. Ids start at 1 and are never
reused: deleting an item does not rewind the counter. All operations take the
registry lock, since FastAPI runs plain ``def`` handlers on a thread pool.
"""

import threading
from typing import Dict, List, Optional

from ..core.errors import NotFoundError, ValidationError
from ..core.logger import get_logger
from ..models.schemas import InventoryItem

_logger = get_logger(__name__)


# PUBLIC_INTERFACE
class InventoryRegistry:
    """Authoritative store of inventory items and id allocation."""

    def __init__(self) -> None:
        self._items: Dict[int, InventoryItem] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def _require(self, item_id: Optional[int]) -> InventoryItem:
        # Caller holds the lock.
        item = self._items.get(item_id) if item_id is not None else None
        if item is None:
            raise NotFoundError(f"Inventory item {item_id} not found")
        return item

    def create(
        self,
        name: Optional[str],
        description: Optional[str] = None,
        photo_ref: Optional[str] = None,
    ) -> InventoryItem:
        """Store a new item under the next id.

        Raises:
            ValidationError: if ``name`` is absent or empty.
        """
        if not name:
            raise ValidationError("inventory_name is required")
        with self._lock:
            item = InventoryItem(
                id=self._next_id,
                name=name,
                description=description or "",
                photo_ref=photo_ref,
            )
            self._items[item.id] = item
            self._next_id += 1
        _logger.info("Inventory item created", extra={"item_id": item.id, "has_photo": photo_ref is not None})
        return item

    def list(self) -> List[InventoryItem]:
        """All items in creation order."""
        with self._lock:
            return list(self._items.values())

    def get(self, item_id: Optional[int]) -> InventoryItem:
        with self._lock:
            return self._require(item_id)

    def update(
        self,
        item_id: Optional[int],
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> InventoryItem:
        """Overwrite each non-empty field; empty or absent fields are left as they are.

        Unlike ``create`` an empty name is not an error here, it is simply ignored.
        """
        with self._lock:
            item = self._require(item_id)
            if name:
                item.name = name
            if description:
                item.description = description
        _logger.info("Inventory item updated", extra={"item_id": item.id})
        return item

    def replace_photo(self, item_id: Optional[int], photo_ref: str) -> InventoryItem:
        with self._lock:
            item = self._require(item_id)
            item.photo_ref = photo_ref
        _logger.info("Inventory photo replaced", extra={"item_id": item.id, "photo_ref": photo_ref})
        return item

    def delete(self, item_id: Optional[int]) -> InventoryItem:
        """Remove and return the item. Its stored photo, if any, is left on disk."""
        with self._lock:
            item = self._require(item_id)
            del self._items[item.id]
        _logger.info("Inventory item deleted", extra={"item_id": item.id})
        return item
