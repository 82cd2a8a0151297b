"""
Pydantic models for the inventory registry and its HTTP surface: the stored
item, the decoded request payloads per route, and the response bodies.
"""

from typing import List, Optional

from fastapi import Form
from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Domain
# ---------------------------------------------------------------------------

# PUBLIC_INTERFACE
class InventoryItem(BaseModel):
    """An item held by the registry. Mutated in place by update and photo replace."""
    id: int = Field(..., ge=1, description="Registry-assigned identifier.")
    name: str = Field(..., description="Item name.")
    description: str = Field(default="", description="Free-text description.")
    photo_ref: Optional[str] = Field(default=None, description="Stored photo filename, if any.")


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

# PUBLIC_INTERFACE
class RegistrationForm(BaseModel):
    """Text fields of the multipart registration form. Presence is checked by the registry."""
    inventory_name: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def as_form(
        cls,
        inventory_name: Optional[str] = Form(None),
        description: Optional[str] = Form(None),
    ):
        return cls(inventory_name=inventory_name, description=description)


# PUBLIC_INTERFACE
class InventoryUpdateIn(BaseModel):
    """Partial update payload; absent or empty fields leave the item unchanged."""
    inventory_name: Optional[str] = Field(default=None, description="New name.")
    description: Optional[str] = Field(default=None, description="New description.")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"inventory_name": "Drill", "description": "Cordless, 18V"}},
    )


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

# PUBLIC_INTERFACE
class ItemOut(BaseModel):
    """Wire form of an item, shared by the inventory and search routes."""
    id: int
    inventory_name: str
    description: str
    photo: Optional[str] = None

    @classmethod
    def from_item(cls, item: InventoryItem, photo: Optional[str] = None) -> "ItemOut":
        return cls(
            id=item.id,
            inventory_name=item.name,
            description=item.description,
            photo=photo,
        )


class ItemResponse(BaseModel):
    item: ItemOut


class InventoryListResponse(BaseModel):
    inventoryList: List[ItemOut] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str


class RegisterResponse(MessageResponse):
    id: int = Field(..., description="Identifier assigned to the new item.")


class ErrorResponse(BaseModel):
    error: str
