from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email
from typing import List, Optional, Dict, Any
from datetime import datetime
from enum import Enum


def _unwrap_nodes(value):
    """Accept either a plain list or a GraphQL connection ({"nodes": [...]})"""
    if isinstance(value, dict):
        return value.get("nodes") or []
    return value if value is not None else []


class StorefrontModel(BaseModel):
    """Base for models parsed from Storefront API responses (camelCase keys)"""
    model_config = ConfigDict(populate_by_name=True)


class Image(StorefrontModel):
    id: Optional[str] = None
    url: str
    alt_text: Optional[str] = Field(default=None, alias="altText")
    width: Optional[int] = None
    height: Optional[int] = None


class Money(StorefrontModel):
    amount: str
    currency_code: str = Field(alias="currencyCode")


class PriceRange(StorefrontModel):
    min_variant_price: Money = Field(alias="minVariantPrice")


class Collection(StorefrontModel):
    id: str
    title: str
    handle: str
    image: Optional[Image] = None


class Product(StorefrontModel):
    id: str
    title: str
    handle: str
    description: str = ""
    price_range: Optional[PriceRange] = Field(default=None, alias="priceRange")
    images: List[Image] = []

    @field_validator("images", mode="before")
    @classmethod
    def unwrap_images(cls, v):
        return _unwrap_nodes(v)

    @field_validator("description", mode="before")
    @classmethod
    def blank_description(cls, v):
        return v or ""


class MenuItem(StorefrontModel):
    id: str
    title: str
    url: Optional[str] = None


class Menu(StorefrontModel):
    id: Optional[str] = None
    items: List[MenuItem] = []

    @field_validator("items", mode="before")
    @classmethod
    def items_must_be_list(cls, v):
        # Malformed menus render no quick links
        return v if isinstance(v, list) else []


# Rendered views

class RegionState(str, Enum):
    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"


class RegionView(BaseModel):
    region: str
    state: RegionState
    data: Dict[str, Any] = {}


class CollectionTile(BaseModel):
    id: str
    title: str
    url: str
    image: Optional[Image] = None


class ProductTile(BaseModel):
    id: str
    title: str
    description: str
    price: Optional[str] = None
    url: str
    selected: bool = False


class PromoBar(BaseModel):
    heading: str = "Exclusive Offer!"
    subheading: str = "Get amazing discounts and more:"
    perks: List[str] = [
        "20% off your first order!",
        "Free shipping on orders over $50",
        "Special offers for members",
    ]
    cta_label: str = "Contact Us"
    cta_url: str = "/contact"


class HomeFrame(BaseModel):
    """First chunk of the streamed home page: everything known before deferred data settles"""
    title: str
    featured_collection: Optional[RegionView] = None
    regions: List[RegionView] = []
    promo: PromoBar = Field(default_factory=PromoBar)


class QuickLink(BaseModel):
    id: str
    title: str
    path: str


class FooterView(BaseModel):
    brand_name: str
    address: str
    phone: str
    quick_links: List[QuickLink] = []
    social_media: List[str] = []
    copyright: str


# Contact form

class FormStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class FormState(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    email: str = ""
    message: str = ""
    status: FormStatus = FormStatus.IDLE
    error_message: str = ""


class ContactRequest(BaseModel):
    """Submitted values are kept exactly as typed; validation never rewrites them"""
    name: str
    email: str
    message: str

    @field_validator("name", "email", "message")
    @classmethod
    def required(cls, v):
        if not v.strip():
            raise ValueError("This field is required")
        return v

    @field_validator("email")
    @classmethod
    def valid_email(cls, v):
        # validate_email normalizes its result; only the check is wanted here
        validate_email(v)
        return v


class ContactResponse(BaseModel):
    status: FormStatus
    name: str
    email: str
    message: str
    error_message: str = ""
    notice: Optional[str] = None
    submit_label: str
    submit_disabled: bool


class ErrorResponse(BaseModel):
    error: str
    message: str
    status_code: int
    timestamp: datetime = Field(default_factory=datetime.now)
