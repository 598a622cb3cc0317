"""Closed catalog of navigation destinations and their metadata."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, Optional


class ProductAvailability(str, Enum):
    """Stock state a search can be filtered on."""

    IN_STOCK = "in_stock"
    LIMITED_STOCK = "limited_stock"
    OUT_OF_STOCK = "out_of_stock"
    PRE_ORDER = "pre_order"
    DISCONTINUED = "discontinued"

    @property
    def display_text(self) -> str:
        return _AVAILABILITY_LABELS[self]


_AVAILABILITY_LABELS = {
    ProductAvailability.IN_STOCK: "In Stock",
    ProductAvailability.LIMITED_STOCK: "Limited Stock",
    ProductAvailability.OUT_OF_STOCK: "Out of Stock",
    ProductAvailability.PRE_ORDER: "Pre-Order",
    ProductAvailability.DISCONTINUED: "Discontinued",
}


@dataclass(frozen=True)
class PriceRange:
    """Inclusive, non-negative price bounds."""

    lower: float
    upper: float

    def __post_init__(self) -> None:
        if self.lower < 0 or self.upper < 0:
            raise ValueError(f"price bounds must be non-negative, got {self.lower}..{self.upper}")
        if self.lower > self.upper:
            raise ValueError(f"price range lower bound {self.lower} exceeds upper bound {self.upper}")

    def contains(self, price: float) -> bool:
        return self.lower <= price <= self.upper


@dataclass(frozen=True)
class SearchFilters:
    """Filters attached to a search results destination.

    Set-valued fields accept any iterable and are stored as frozensets so the
    filters stay hashable and compare without regard to order.
    """

    collections: frozenset[str] = field(default_factory=frozenset)
    price_range: Optional[PriceRange] = None
    materials: frozenset[str] = field(default_factory=frozenset)
    availability: frozenset[ProductAvailability] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "collections", _as_frozenset(self.collections))
        object.__setattr__(self, "materials", _as_frozenset(self.materials))
        object.__setattr__(
            self,
            "availability",
            frozenset(ProductAvailability(v) for v in _as_frozenset(self.availability)),
        )
        if isinstance(self.price_range, (tuple, list)):
            object.__setattr__(self, "price_range", PriceRange(*self.price_range))

    @property
    def is_empty(self) -> bool:
        return not (self.collections or self.price_range or self.materials or self.availability)


def _as_frozenset(values: Iterable | None) -> frozenset:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        return frozenset([values])
    return frozenset(values)


# Populated by Destination.__init_subclass__ in declaration order.
_REGISTRY: dict[str, type["Destination"]] = {}


def _kind_for(name: str) -> str:
    # ARTryOn -> ar_try_on, ProductDetail -> product_detail
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    return re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s).lower()


class Destination:
    """Base class for every navigation target.

    Each variant must declare its metadata when the class is defined::

        @dataclass(frozen=True)
        class ProductDetail(Destination, title="Product Details"):
            product_id: str

    Leaving out ``title`` raises ``TypeError`` at class creation, so the title,
    authentication and premium lookups are total over the closed set.
    """

    kind: ClassVar[str]
    title: ClassVar[str]
    requires_authentication: ClassVar[bool]
    is_premium_content: ClassVar[bool]

    def __init_subclass__(
        cls,
        *,
        title: Optional[str] = None,
        requires_authentication: bool = False,
        premium: bool = False,
        **kwargs,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if not title:
            raise TypeError(f"destination {cls.__name__} must declare a title")
        cls.kind = _kind_for(cls.__name__)
        cls.title = title
        cls.requires_authentication = requires_authentication
        cls.is_premium_content = premium
        if cls.kind in _REGISTRY:
            raise TypeError(f"duplicate destination kind {cls.kind!r}")
        _REGISTRY[cls.kind] = cls

    def __new__(cls, *args, **kwargs):
        if cls is Destination:
            raise TypeError("Destination is abstract; instantiate one of its variants")
        return super().__new__(cls)

    def params(self) -> dict:
        """Return the variant's parameters as a plain dict."""
        return {name: getattr(self, name) for name in self.__dataclass_fields__}


# ═══════════════════════════════════════════════════════════════════════════════
# CORE PRODUCT NAVIGATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ProductDetail(Destination, title="Product Details"):
    product_id: str


@dataclass(frozen=True)
class CollectionDetail(Destination, title="Collection"):
    collection_id: str


# ═══════════════════════════════════════════════════════════════════════════════
# STORE & LOCATION
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BoutiqueDetail(Destination, title="Boutique"):
    store_id: str


@dataclass(frozen=True)
class AppointmentBooking(Destination, title="Book Appointment", requires_authentication=True):
    store_id: str


# ═══════════════════════════════════════════════════════════════════════════════
# ADVANCED FEATURES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class WatchConfigurator(Destination, title="Customize Watch"):
    product_id: str


@dataclass(frozen=True)
class ARTryOn(Destination, title="AR Try-On"):
    product_id: str


# ═══════════════════════════════════════════════════════════════════════════════
# USER ACCOUNT
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OrderHistory(Destination, title="Order History", requires_authentication=True):
    pass


@dataclass(frozen=True)
class OrderDetail(Destination, title="Order Details", requires_authentication=True):
    order_id: str


@dataclass(frozen=True)
class WishlistDetail(Destination, title="Wishlist", requires_authentication=True):
    wishlist_id: str


@dataclass(frozen=True)
class Settings(Destination, title="Settings", requires_authentication=True):
    pass


@dataclass(frozen=True)
class EditProfile(Destination, title="Edit Profile", requires_authentication=True):
    pass


# ═══════════════════════════════════════════════════════════════════════════════
# SEARCH & FILTERING
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class SearchResults(Destination, title="Search Results"):
    query: str
    filters: Optional[SearchFilters] = None


@dataclass(frozen=True)
class CollectionFilter(Destination, title="Collection"):
    collection_id: str


# ═══════════════════════════════════════════════════════════════════════════════
# HERITAGE & CONTENT
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class HeritageStory(Destination, title="Heritage"):
    story_id: str


@dataclass(frozen=True)
class BrandContent(Destination, title="Breitling"):
    content_id: str


# ═══════════════════════════════════════════════════════════════════════════════
# SUPPORT & SERVICES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class CustomerSupport(Destination, title="Support"):
    pass


@dataclass(frozen=True)
class WarrantyRegistration(Destination, title="Warranty Registration", requires_authentication=True):
    product_id: str


@dataclass(frozen=True)
class ServiceRequest(Destination, title="Service Request", requires_authentication=True):
    product_id: str


# ═══════════════════════════════════════════════════════════════════════════════
# PREMIUM
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ExclusiveContent(Destination, title="Exclusive", requires_authentication=True, premium=True):
    pass


@dataclass(frozen=True)
class LimitedEditions(Destination, title="Limited Editions", premium=True):
    pass


@dataclass(frozen=True)
class MembershipBenefits(Destination, title="Membership", requires_authentication=True, premium=True):
    pass


# ═══════════════════════════════════════════════════════════════════════════════
# ONBOARDING
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class WelcomeOnboarding(Destination, title="Welcome"):
    pass


@dataclass(frozen=True)
class StylePreferences(Destination, title="Style Preferences"):
    pass


@dataclass(frozen=True)
class LocationPermissions(Destination, title="Location Services"):
    pass


@dataclass(frozen=True)
class NotificationPermissions(Destination, title="Notifications"):
    pass


def all_destination_types() -> tuple[type[Destination], ...]:
    """Every destination variant, in declaration order."""
    return tuple(_REGISTRY.values())


def destination_type(kind: str) -> type[Destination]:
    """Look up a variant by its snake_case tag (e.g. ``"ar_try_on"``)."""
    return _REGISTRY[kind]
