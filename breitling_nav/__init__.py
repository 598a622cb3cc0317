"""Navigation routing core for the Breitling retail app."""

from .deeplinks import DeepLinkResult, DeepLinkStatus, MalformedDeepLink, resolve_deep_link
from .destinations import Destination, PriceRange, ProductAvailability, SearchFilters
from .navigator import NavigationPath
from .router import NavigationRouter, register_screen
from .state import AppNavigationState, TabSelection

__all__ = [
    "AppNavigationState",
    "DeepLinkResult",
    "DeepLinkStatus",
    "Destination",
    "MalformedDeepLink",
    "NavigationPath",
    "NavigationRouter",
    "PriceRange",
    "ProductAvailability",
    "SearchFilters",
    "TabSelection",
    "register_screen",
    "resolve_deep_link",
]
