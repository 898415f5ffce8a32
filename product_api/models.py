# product_api/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union, Dict, Any

ALLOWED_CATEGORIES = ("electronics", "clothing", "books", "home")


class ProductIn(BaseModel):
    """Write payload after validation and normalization."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    price: Union[int, float]
    category: str
    in_stock: bool = Field(True, alias="inStock")


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    description: str = ""
    price: Union[int, float]
    category: str
    in_stock: bool = Field(True, alias="inStock")
    updated_at: Optional[str] = Field(None, alias="updatedAt")

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


SAMPLE_PRODUCTS = (
    Product(
        id="1",
        name="Laptop",
        description="High-performance laptop with 16GB RAM",
        price=1200,
        category="electronics",
        in_stock=True,
    ),
    Product(
        id="2",
        name="Smartphone",
        description="Latest model with 128GB storage",
        price=800,
        category="electronics",
        in_stock=True,
    ),
    # "kitchen" sits outside ALLOWED_CATEGORIES; reads keep it as-is
    Product(
        id="3",
        name="Coffee Maker",
        description="Programmable coffee maker with timer",
        price=50,
        category="kitchen",
        in_stock=False,
    ),
)
