# storefront/models.py
# Table definitions for the storefront / site-content store.
#  - JSON columns hold opaque caller values (serialized on write, decoded on read)
#  - Handlers query through the Core tables (Model.__table__) via Database

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)

from storefront.database import Base
from storefront.utils import generate_product_id, utcnow


class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, default=generate_product_id)  # caller may supply
    name = Column(String, nullable=False)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    offer_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    category = Column(String, index=True)
    rating = Column(Numeric(3, 1, asdecimal=False), nullable=False, default=5)
    reviews = Column(Integer, nullable=False, default=0)               # review count shown on cards
    description = Column(Text)
    material = Column(String)
    dimensions = Column(String)
    origin = Column(String)
    impact = Column(Text)
    details = Column(JSON)                                             # ordered list
    story = Column(JSON)                                               # structured object
    images = Column(JSON)                                              # ordered list of URLs
    stock = Column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return f"<Product id={self.id!r} name={self.name!r}>"


class GalleryItem(Base):
    __tablename__ = "gallery"

    id = Column(Integer, primary_key=True)
    url = Column(String, nullable=False)
    caption = Column(String)


class Story(Base):
    __tablename__ = "stories"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    role = Column(String)
    image = Column(String)
    quote = Column(Text)
    featured = Column(Boolean, nullable=False, default=False)


class TeamMember(Base):
    __tablename__ = "team"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    role = Column(String)
    image = Column(String)


class JourneyEntry(Base):
    __tablename__ = "journey"

    id = Column(Integer, primary_key=True)
    year = Column(Integer, nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)


class Program(Base):
    __tablename__ = "programs"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    image = Column(String)
    features = Column(JSON)


class Setting(Base):
    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    key = Column(String, unique=True, nullable=False)
    value = Column(JSON)

    def __repr__(self) -> str:
        return f"<Setting key={self.key!r}>"


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    read = Column(Boolean, nullable=False, default=False)


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True)
    product_id = Column(String, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(Text)
    author = Column(String)
    status = Column(String, nullable=False, default="pending")  # pending -> approved
    date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Review id={self.id} product_id={self.product_id!r} status={self.status!r}>"


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    items = Column(JSON, nullable=False)
    total = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    customer_info = Column(JSON)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Order id={self.id} total={self.total}>"


class WishlistEntry(Base):
    __tablename__ = "wishlist"
    __table_args__ = (UniqueConstraint("session_id", "product_id", name="uq_wishlist_session_product"),)

    id = Column(Integer, primary_key=True)
    session_id = Column(String, nullable=False, index=True)
    product_id = Column(String, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)


products = Product.__table__
gallery = GalleryItem.__table__
stories = Story.__table__
team = TeamMember.__table__
journey = JourneyEntry.__table__
programs = Program.__table__
settings = Setting.__table__
messages = Message.__table__
reviews = Review.__table__
orders = Order.__table__
wishlist = WishlistEntry.__table__
