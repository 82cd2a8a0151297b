from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..api.deps import get_photo_store, get_registry, parse_item_id
from ..core.logger import get_logger
from ..models.schemas import ErrorResponse, ItemOut
from ..services.photo_store import PhotoStore
from ..services.registry import InventoryRegistry

router = APIRouter(prefix="/search", tags=["Search"])

_logger = get_logger(__name__)

# Value an HTML checkbox submits when ticked.
_CHECKBOX_ON = "on"


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=ItemOut,
    summary="Search inventory by id",
    description=(
        "Look up one item by its numeric id. When includePhoto is 'on' and the item has a photo, "
        "the response carries the absolute path of the stored file."
    ),
    responses={404: {"model": ErrorResponse, "description": "No such inventory item."}},
)
def search_inventory(
    item_id: Optional[str] = Query(default=None, alias="id", description="Inventory item id."),
    include_photo: Optional[str] = Query(
        default=None, alias="includePhoto", description="'on' to include the photo path."
    ),
    registry: InventoryRegistry = Depends(get_registry),
    store: PhotoStore = Depends(get_photo_store),
) -> ItemOut:
    """
    Parameters:
    - id: item identifier; non-numeric values match nothing.
    - includePhoto: only the literal value "on" enables the photo path.

    Returns:
    - ItemOut with photo set to the stored file's absolute path, or null.
    """
    item = registry.get(parse_item_id(item_id))

    photo = None
    if include_photo == _CHECKBOX_ON and item.photo_ref:
        photo = str(store.path_for(item.photo_ref))

    _logger.info("Search", extra={"item_id": item.id, "include_photo": photo is not None})
    return ItemOut.from_item(item, photo)
