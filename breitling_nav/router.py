"""Navigation router and screen registry for one navigation root."""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional

from . import destinations as dest
from .deeplinks import DeepLinkResult, DeepLinkStatus, resolve_deep_link
from .navigator import NavigationPath

logger = logging.getLogger(__name__)

Observer = Callable[["NavigationRouter", "tuple[dest.Destination, ...]"], None]


class NavigationRouter:
    """Stack-based router for a single navigation root (one tab).

    The router owns its NavigationPath and is the only thing that mutates it:
    - navigate pushes a destination (duplicates allowed, no limit)
    - navigate_back pops one or more entries, clamped to the current depth
    - navigate_to_root clears the stack in a single step
    - replace swaps the top entry, or pushes when at the root

    Observers registered with subscribe() are called synchronously after
    every mutating call, so the view layer never sees a stale path.

    A router must be driven from one thread. Give each navigation root its
    own instance rather than sharing one.
    """

    def __init__(
        self,
        *,
        accepted_schemes: Optional[Iterable[str]] = None,
        root_label: str = "Home",
        screens: Optional[dict[type[dest.Destination], Callable[[dest.Destination], Any]]] = None,
    ):
        """Initialize an empty router.

        Args:
            accepted_schemes: Deep-link schemes to accept (empty accepts any)
            root_label: Breadcrumb label for the root screen
            screens: Render callbacks by destination type (defaults to SCREENS)
        """
        self._path = NavigationPath()
        self._observers: list[Observer] = []
        # Bumped on every notification; an outer delivery stops once a nested one has run.
        self._version = 0
        self._pushes = 0
        self.accepted_schemes = tuple(accepted_schemes or ())
        self.root_label = root_label
        self.screens = SCREENS if screens is None else screens

    # ───────────────────────────────────────────────────────────────────────
    # Observation
    # ───────────────────────────────────────────────────────────────────────

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register a change callback. Returns a function that unsubscribes it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def _notify(self) -> None:
        """Deliver the current path to every observer.

        An observer may mutate the router (e.g. an auth gate calling
        replace). The nested notification then delivers the newer path to
        all observers, and this delivery stops so nobody is handed a stale
        snapshot afterwards.
        """
        self._version += 1
        version = self._version
        snapshot = self._path.entries()
        for observer in list(self._observers):
            if self._version != version:
                break
            try:
                observer(self, snapshot)
            except Exception:
                logger.exception("navigation observer %r failed", observer)

    @staticmethod
    def _check(destination: object) -> None:
        if not isinstance(destination, dest.Destination):
            raise TypeError(f"expected a Destination, got {type(destination).__name__}")

    # ───────────────────────────────────────────────────────────────────────
    # Mutations
    # ───────────────────────────────────────────────────────────────────────

    def navigate(self, destination: dest.Destination) -> None:
        """Push a destination onto the stack."""
        self._check(destination)
        self._path.push(destination)
        self._pushes += 1
        logger.debug("navigate -> %s (depth=%d)", destination, self._path.depth())
        self._notify()

    def navigate_back(self, levels: int = 1) -> None:
        """Pop ``levels`` entries (default one).

        Popping past the root stops at the root; negative levels pop nothing.
        """
        removed = self._path.pop_many(levels)
        logger.debug("navigate_back(%d) removed %d (depth=%d)", levels, len(removed), self._path.depth())
        self._notify()

    def navigate_to_root(self) -> None:
        """Clear the stack in one step."""
        self._path.clear()
        logger.debug("navigate_to_root")
        self._notify()

    def replace(self, destination: dest.Destination) -> None:
        """Make ``destination`` the top of the stack without changing depth.

        At the root this is a plain push.
        """
        self._check(destination)
        self._path.pop()
        self._path.push(destination)
        self._pushes += 1
        logger.debug("replace -> %s (depth=%d)", destination, self._path.depth())
        self._notify()

    # ───────────────────────────────────────────────────────────────────────
    # Convenience navigation
    # ───────────────────────────────────────────────────────────────────────

    def show_product(self, product_id: str) -> None:
        self.navigate(dest.ProductDetail(product_id=product_id))

    def show_collection(self, collection_id: str) -> None:
        self.navigate(dest.CollectionDetail(collection_id=collection_id))

    def show_boutique(self, store_id: str) -> None:
        self.navigate(dest.BoutiqueDetail(store_id=store_id))

    def show_watch_configurator(self, product_id: str) -> None:
        self.navigate(dest.WatchConfigurator(product_id=product_id))

    def show_ar_try_on(self, product_id: str) -> None:
        self.navigate(dest.ARTryOn(product_id=product_id))

    def show_appointment_booking(self, store_id: str) -> None:
        self.navigate(dest.AppointmentBooking(store_id=store_id))

    def show_order_history(self) -> None:
        self.navigate(dest.OrderHistory())

    def show_order(self, order_id: str) -> None:
        self.navigate(dest.OrderDetail(order_id=order_id))

    def show_wishlist(self, wishlist_id: str) -> None:
        self.navigate(dest.WishlistDetail(wishlist_id=wishlist_id))

    def show_settings(self) -> None:
        self.navigate(dest.Settings())

    # ───────────────────────────────────────────────────────────────────────
    # Deep links
    # ───────────────────────────────────────────────────────────────────────

    def handle_deep_link(self, url: str) -> DeepLinkResult:
        """Resolve ``url`` and apply it to the stack.

        Matched links push their destination, unrecognized hosts reset to the
        root, and malformed links or links missing their parameter change
        nothing. The result is returned so callers can log or alert.
        """
        result = resolve_deep_link(url, self.accepted_schemes)

        if result.status is DeepLinkStatus.MATCHED:
            logger.info("deep link %s -> %s", result.url, result.destination)
            self.navigate(result.destination)
        elif result.status is DeepLinkStatus.UNRECOGNIZED:
            logger.info("deep link %s has unrecognized host %r; returning to root", result.url, result.host)
            self.navigate_to_root()
        elif result.status is DeepLinkStatus.MISSING_PARAMETER:
            logger.info(
                "deep link %s ignored: host %r requires %r",
                result.url,
                result.host,
                result.missing_parameter,
            )
        else:
            logger.warning("deep link %s ignored: %s", result.url, result.reason)

        return result

    # ───────────────────────────────────────────────────────────────────────
    # State
    # ───────────────────────────────────────────────────────────────────────

    @property
    def path(self) -> tuple[dest.Destination, ...]:
        return self._path.entries()

    @property
    def can_go_back(self) -> bool:
        return not self._path.is_empty()

    @property
    def navigation_depth(self) -> int:
        return self._path.depth()

    @property
    def is_at_root(self) -> bool:
        return self._path.is_empty()

    @property
    def push_count(self) -> int:
        """Destinations pushed so far by navigate or replace."""
        return self._pushes

    @property
    def current(self) -> Optional[dest.Destination]:
        """Top of the stack, or None at the root."""
        return self._path.top()

    def breadcrumbs(self) -> str:
        return self._path.breadcrumbs(self.root_label)

    def render_stack(self) -> list[Any]:
        """Call each path entry's render callback, root side first.

        Entries with no registered callback are skipped with a warning.
        """
        rendered = []
        for destination in self._path:
            render = self.screens.get(type(destination))
            if render is None:
                logger.warning("no screen registered for %s", destination.kind)
                continue
            rendered.append(render(destination))
        return rendered


# Screen registry - maps destination types to render callbacks supplied by the
# view layer.
SCREENS: dict[type[dest.Destination], Callable[[dest.Destination], Any]] = {}


def register_screen(destination_type: type[dest.Destination]):
    """Decorator to register a render callback for a destination type.

    Usage:
        @register_screen(ProductDetail)
        def product_screen(destination: ProductDetail):
            ...
    """
    def decorator(fn: Callable[[dest.Destination], Any]):
        SCREENS[destination_type] = fn
        return fn
    return decorator
