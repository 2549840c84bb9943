"""Product data models."""

from typing import Optional

from pydantic import BaseModel, Field


class ProductColor(BaseModel):
    """Color variant."""

    id: str
    name: str
    hex: Optional[str] = None


class ProductBase(BaseModel):
    """Base product model."""

    name: str = Field(..., min_length=1, max_length=500)
    price: float = Field(..., ge=0, description="Unit price in cedis")
    stock: int = Field(0, ge=0)
    available: bool = True
    category: str = ""
    teamId: Optional[str] = None
    team: Optional[str] = None
    league: Optional[str] = None
    images: list[str] = Field(default_factory=list)
    description: str = ""
    colors: list[ProductColor] = Field(default_factory=list)
    sizes: list[str] = Field(default_factory=list)


class Product(ProductBase):
    """Product with its catalog id."""

    id: str = Field(..., description="Unique product identifier")

    class Config:
        """Pydantic config."""

        json_schema_extra = {
            "example": {
                "id": "man-utd-home-jersey",
                "name": "Manchester United Home Jersey",
                "price": 89.99,
                "stock": 12,
                "available": True,
                "category": "jerseys",
                "teamId": "man-utd",
                "team": "Manchester United",
                "league": "Premier League",
                "images": [],
                "description": "Official home jersey.",
                "colors": [{"id": "home", "name": "Home", "hex": "#1a1a1a"}],
                "sizes": ["S", "M", "L", "XL"],
            }
        }
