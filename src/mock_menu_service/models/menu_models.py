"""Menu data models.

These models represent the menu items served by the mock menu service and the
JSON envelopes returned by its endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field


class MenuItem(BaseModel):
    """Menu item model.

    Items are immutable once created; the catalog hands the same instances to
    every request.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Unique identifier for the menu item")
    name: str = Field(..., description="Item name")
    price: float = Field(..., description="Item price", ge=0)
    available: bool = Field(..., description="Whether item is currently available")
    description: str = Field(..., description="Item description")
    restaurant: str = Field(..., description="Restaurant serving the item")
    category: str = Field(..., description="Menu category")
    prep_time_minutes: int = Field(..., description="Preparation time in minutes", ge=0)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    timestamp: str


class MenuListResponse(BaseModel):
    """Response model for the full menu listing."""

    menu_items: list[MenuItem]
    count: int


class MenuItemResponse(BaseModel):
    """Response model for a single menu item lookup."""

    menu_item: MenuItem


class ErrorResponse(BaseModel):
    """Error body returned for every JSON error response."""

    error: str = Field(..., description="Standard HTTP reason phrase")
    message: str = Field(..., description="Human readable error message")
