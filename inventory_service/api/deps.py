"""
FastAPI dependencies handing the per-application registry and photo store to
route handlers, plus the identifier parser shared by the routers.
"""

import re
from typing import Optional

from fastapi import Request

from ..services.photo_store import PhotoStore
from ..services.registry import InventoryRegistry

# ASCII digits only: int() alone would also take "1_0" and non-ASCII digits.
_ITEM_ID = re.compile(r"[+-]?[0-9]+")


# PUBLIC_INTERFACE
def get_registry(request: Request) -> InventoryRegistry:
    """Registry created by create_app for this application."""
    return request.app.state.registry


# PUBLIC_INTERFACE
def get_photo_store(request: Request) -> PhotoStore:
    return request.app.state.photo_store


# PUBLIC_INTERFACE
def parse_item_id(raw: Optional[str]) -> Optional[int]:
    """
    Parse a path or query identifier. Anything that is not an integer yields None,
    which matches no item, so callers report it as not found.
    """
    if raw is None:
        return None
    raw = raw.strip()
    if not _ITEM_ID.fullmatch(raw):
        return None
    return int(raw)
