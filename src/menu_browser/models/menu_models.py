"""Menu data models.

These models mirror the JSON envelopes returned by the menu API. Field
aliases carry the wire names so the models decode server payloads directly
and re-encode to the same shape with ``model_dump(by_alias=True)``.
"""

from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

SPICY_FLAG = "Y"


class Category(BaseModel):
    """Menu category model."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    # Client-side identity for list rendering, never sent by the server
    id: UUID = Field(default_factory=uuid4, exclude=True, description="Client-generated identifier")
    menu_id: str = Field(..., alias="menuID", description="Server key used to request dishes")
    image_url: str = Field(..., alias="image", description="Image path relative to the image origin")
    name: str = Field(..., description="Category name")
    sub_menu_count: int = Field(..., alias="subMenuCount", description="Number of dishes in the category")

    @model_validator(mode="before")
    @classmethod
    def drop_incoming_id(cls, data: Any) -> Any:
        """Ignore any id in the input so identity is always generated locally."""
        if isinstance(data, dict) and "id" in data:
            data = {key: value for key, value in data.items() if key != "id"}
        return data


class Dish(BaseModel):
    """Dish model.

    Price and weight are display strings as sent by the server and are never
    parsed.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(..., description="Server-supplied dish identifier")
    image_url: str = Field(..., alias="image", description="Image path relative to the image origin")
    name: str = Field(..., description="Dish name")
    description: str = Field(..., alias="content", description="Dish ingredients")
    price: str = Field(..., description="Display-formatted price")
    weight: str = Field(..., description="Display-formatted weight")
    spicy: str | None = Field(None, description="Spicy flag, 'Y' when the dish is spicy")

    @property
    def is_spicy(self) -> bool:
        """Whether the dish carries the spicy flag."""
        return self.spicy == SPICY_FLAG


class CategoryResponse(BaseModel):
    """Envelope returned by the category list endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    status: bool
    items: list[Category] = Field(..., alias="menuList")


class DishResponse(BaseModel):
    """Envelope returned by the dish list endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    status: bool
    items: list[Dish] = Field(..., alias="menuList")
