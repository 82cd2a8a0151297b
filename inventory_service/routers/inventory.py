import mimetypes
from typing import BinaryIO, Iterator, Optional

from fastapi import APIRouter, Body, Depends, File, UploadFile
from fastapi.responses import StreamingResponse

from ..api.deps import get_photo_store, get_registry, parse_item_id
from ..core.errors import ValidationError
from ..core.logger import get_logger
from ..models.schemas import (
    ErrorResponse,
    InventoryListResponse,
    InventoryUpdateIn,
    ItemOut,
    ItemResponse,
    MessageResponse,
    RegisterResponse,
    RegistrationForm,
)
from ..services.photo_store import PhotoStore
from ..services.registry import InventoryRegistry

router = APIRouter(tags=["Inventory"])

_logger = get_logger(__name__)

_CHUNK_SIZE = 64 * 1024

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "No such inventory item."}}


def _has_file(upload: Optional[UploadFile]) -> bool:
    # A form submitted with no file chosen still sends a part with an empty filename.
    return upload is not None and bool(upload.filename)


def _iter_file(fh: BinaryIO) -> Iterator[bytes]:
    with fh:
        while True:
            chunk = fh.read(_CHUNK_SIZE)
            if not chunk:
                break
            yield chunk


async def _store_upload(store: PhotoStore, upload: UploadFile) -> str:
    try:
        content = await upload.read()
    finally:
        await upload.close()
    return store.store(upload.filename, content)


# PUBLIC_INTERFACE
@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=201,
    summary="Register inventory item",
    description="Create an item from a multipart form with inventory_name, description and an optional photo.",
    responses={400: {"model": ErrorResponse, "description": "inventory_name missing."}},
)
async def register_item(
    form: RegistrationForm = Depends(RegistrationForm.as_form),
    photo: Optional[UploadFile] = File(None),
    registry: InventoryRegistry = Depends(get_registry),
    store: PhotoStore = Depends(get_photo_store),
) -> RegisterResponse:
    """
    Register a new item. The name is checked before the photo is written so a
    rejected registration leaves nothing in the cache directory.
    """
    if not form.inventory_name:
        _logger.info("Registration rejected: missing inventory_name")
        raise ValidationError("inventory_name is required")

    photo_ref = await _store_upload(store, photo) if _has_file(photo) else None
    item = registry.create(form.inventory_name, form.description, photo_ref)
    return RegisterResponse(message="Inventory item registered", id=item.id)


# PUBLIC_INTERFACE
@router.get(
    "/inventory",
    response_model=InventoryListResponse,
    summary="List inventory items",
)
def list_inventory(registry: InventoryRegistry = Depends(get_registry)) -> InventoryListResponse:
    """Return every registered item in creation order."""
    items = [ItemOut.from_item(it, it.photo_ref) for it in registry.list()]
    return InventoryListResponse(inventoryList=items)


# PUBLIC_INTERFACE
@router.get(
    "/inventory/{item_id}",
    response_model=ItemResponse,
    summary="Get inventory item",
    responses=_NOT_FOUND,
)
def get_inventory_item(item_id: str, registry: InventoryRegistry = Depends(get_registry)) -> ItemResponse:
    item = registry.get(parse_item_id(item_id))
    return ItemResponse(item=ItemOut.from_item(item, item.photo_ref))


# PUBLIC_INTERFACE
@router.put(
    "/inventory/{item_id}",
    response_model=MessageResponse,
    status_code=201,
    summary="Update inventory item",
    description="Partial update: only non-empty inventory_name/description values are applied.",
    responses=_NOT_FOUND,
)
def update_inventory_item(
    item_id: str,
    payload: Optional[InventoryUpdateIn] = Body(default=None),
    registry: InventoryRegistry = Depends(get_registry),
) -> MessageResponse:
    payload = payload or InventoryUpdateIn()
    item = registry.update(parse_item_id(item_id), payload.inventory_name, payload.description)
    return MessageResponse(message=f"Inventory item {item.id} updated")


# PUBLIC_INTERFACE
@router.get(
    "/inventory/{item_id}/photo",
    response_class=StreamingResponse,
    summary="Download item photo",
    responses={
        200: {"description": "Raw photo bytes."},
        404: {"model": ErrorResponse, "description": "No item, no photo, or photo file missing."},
    },
)
def get_inventory_photo(
    item_id: str,
    registry: InventoryRegistry = Depends(get_registry),
    store: PhotoStore = Depends(get_photo_store),
) -> StreamingResponse:
    """
    Stream the stored photo of an item from the cache directory. The file is
    opened before the response starts, so a photo removed in the meantime is
    still reported as not found.
    """
    item = registry.get(parse_item_id(item_id))
    fh = store.open_photo(item.photo_ref)
    media_type = mimetypes.guess_type(item.photo_ref)[0] or "application/octet-stream"
    return StreamingResponse(_iter_file(fh), media_type=media_type)


# PUBLIC_INTERFACE
@router.put(
    "/inventory/{item_id}/photo",
    response_model=MessageResponse,
    status_code=201,
    summary="Replace item photo",
    responses={
        **_NOT_FOUND,
        400: {"model": ErrorResponse, "description": "photo file missing."},
    },
)
async def replace_inventory_photo(
    item_id: str,
    photo: Optional[UploadFile] = File(None),
    registry: InventoryRegistry = Depends(get_registry),
    store: PhotoStore = Depends(get_photo_store),
) -> MessageResponse:
    """
    Replace the photo of an existing item. The previous file, if any, stays in
    the cache directory.
    """
    item_key = parse_item_id(item_id)
    registry.get(item_key)
    if not _has_file(photo):
        raise ValidationError("photo is required")

    photo_ref = await _store_upload(store, photo)
    item = registry.replace_photo(item_key, photo_ref)
    return MessageResponse(message=f"Photo for inventory item {item.id} updated")


# PUBLIC_INTERFACE
@router.delete(
    "/inventory/{item_id}",
    response_model=MessageResponse,
    summary="Delete inventory item",
    responses=_NOT_FOUND,
)
def delete_inventory_item(item_id: str, registry: InventoryRegistry = Depends(get_registry)) -> MessageResponse:
    item = registry.delete(parse_item_id(item_id))
    return MessageResponse(message=f"Inventory item {item.id} deleted")
