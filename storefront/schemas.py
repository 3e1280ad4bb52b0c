# storefront/schemas.py
# Request bodies for the storefront API.
#  - Shallow validation: required scalars checked, optional fields defaulted
#  - Structured fields (product details/story/images, program features, order
#    items/customer info, setting values) accept any JSON value, stored as-is
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# -------------------- Catalog --------------------

class ProductIn(_Body):
    id: Optional[str] = Field(None, description="Caller-assigned id; generated from the clock when absent")
    name: str
    price: float
    offer_price: Optional[float] = Field(None, alias="offerPrice")
    category: Optional[str] = None
    rating: float = 5
    reviews: int = 0
    description: Optional[str] = None
    material: Optional[str] = None
    dimensions: Optional[str] = None
    origin: Optional[str] = None
    impact: Optional[str] = None
    details: JsonValue = Field(default_factory=list)
    story: JsonValue = None
    images: JsonValue = Field(default_factory=list)
    stock: int = 0


class ReviewIn(_Body):
    product_id: str
    rating: int
    comment: Optional[str] = None
    author: Optional[str] = None
    user_name: Optional[str] = None
    # Accepted but never stored: new reviews always start pending
    status: Optional[str] = None

    @property
    def author_name(self) -> Optional[str]:
        return self.user_name or self.author


class OrderIn(_Body):
    items: JsonValue
    total: float
    customer_info: JsonValue = Field(None, alias="customerInfo")


class WishlistIn(_Body):
    session_id: str
    product_id: str


# -------------------- Site content --------------------

class GalleryIn(_Body):
    url: str
    caption: Optional[str] = None


class StoryIn(_Body):
    name: str
    role: Optional[str] = None
    image: Optional[str] = None
    quote: Optional[str] = None
    featured: bool = False


class TeamMemberIn(_Body):
    name: str
    role: Optional[str] = None
    image: Optional[str] = None


class JourneyIn(_Body):
    year: int
    title: str
    description: Optional[str] = None


class ProgramIn(_Body):
    title: str
    description: Optional[str] = None
    image: Optional[str] = None
    features: JsonValue = Field(default_factory=list)


class SettingIn(_Body):
    value: JsonValue


class MessageIn(_Body):
    name: str
    email: str
    message: str
