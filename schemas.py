"""
Database Schemas for the Aaro storefront

Each Pydantic model corresponds to one MongoDB collection.
Collection name is the lowercase of the class name.
Fields are snake_case in Python and camelCase in MongoDB and on the wire.
"""
from typing import Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

ProductCategory = Literal["phone", "laptop"]
OrderStatus = Literal["Pending", "Processing", "Shipped", "Delivered"]
ORDER_STATUSES = ("Pending", "Processing", "Shipped", "Delivered")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )


class User(CamelModel):
    name: str = Field(..., description="Full name")
    email: EmailStr
    password_hash: str = Field(..., description="bcrypt hash")
    phone: Optional[str] = None
    role: Literal["customer", "admin"] = "customer"


class Category(CamelModel):
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    product_count: int = Field(0, ge=0)


class Brand(CamelModel):
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    category: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    product_count: int = Field(0, ge=0)


class Product(CamelModel):
    name: str = Field(..., min_length=1)
    brand: str
    category: ProductCategory
    price: float = Field(..., ge=0)
    original_price: float = Field(..., ge=0)
    rating: float = Field(0, ge=0, le=5)
    review_count: int = Field(0, ge=0)
    description: str
    images: List[str] = []
    specifications: Union[List[str], Dict[str, str]] = []
    features: List[str] = []
    video_url: Optional[str] = None
    is_featured: bool = False
    is_trending: bool = False
    model_id: Optional[str] = None
    tag: Optional[str] = None


class Offer(CamelModel):
    title: str
    description: Optional[str] = None
    discount: float = Field(0, ge=0, le=100, description="Percent off")
    code: str
    image: Optional[str] = None
    active: bool = False
    tag: Optional[str] = None


class Review(CamelModel):
    product_id: str
    name: str
    comment: str = ""
    rating: int = Field(..., ge=1, le=5)


class ProductModel(CamelModel):
    """Template a new product can be created from."""
    name: str
    category: ProductCategory
    brand: str
    specifications_template: Dict[str, str] = {}
    features_template: List[str] = []


class Variant(CamelModel):
    product_id: str
    ram: str
    storage: str
    color: str
    price: float = Field(..., ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    stock: int = Field(0, ge=0)
    sku: Optional[str] = None
    is_available: bool = True


class ProductSnapshot(CamelModel):
    id: str = Field(..., validation_alias=AliasChoices("id", "_id"))
    name: str
    price: float = Field(..., ge=0)
    brand: Optional[str] = None
    category: Optional[str] = None
    images: List[str] = []


class VariantSnapshot(CamelModel):
    id: Optional[str] = Field(None, validation_alias=AliasChoices("id", "_id"))
    ram: Optional[str] = None
    storage: Optional[str] = None
    color: Optional[str] = None


class OrderItem(CamelModel):
    product: ProductSnapshot
    quantity: int = Field(..., ge=1)
    variant: Optional[VariantSnapshot] = None


class Order(CamelModel):
    user_id: str
    items: List[OrderItem] = Field(..., min_length=1)
    total_amount: float = Field(..., ge=0)
    shipping_address: str = Field(..., min_length=1)
    status: OrderStatus = "Pending"
