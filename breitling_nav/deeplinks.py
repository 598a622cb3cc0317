"""Deep-link parsing and the host dispatch table.

Links have the shape ``scheme://<host>?<key>=<value>&...``. The host picks a
destination and at most one query parameter supplies its identifier::

    breitling://product?id=AB0138241C1A1   -> ProductDetail("AB0138241C1A1")
    breitling://ar?product=AB0138241C1A1   -> ARTryOn("AB0138241C1A1")
    breitling://orders                     -> OrderHistory()

Resolution is pure; applying the result to a navigation stack is the
router's job.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Optional
from urllib.parse import unquote, urlsplit

from .destinations import (
    AppointmentBooking,
    ARTryOn,
    BoutiqueDetail,
    CollectionDetail,
    Destination,
    OrderDetail,
    OrderHistory,
    ProductDetail,
    Settings,
    WatchConfigurator,
    WishlistDetail,
)


class MalformedDeepLink(ValueError):
    """Raised when a link cannot be split into a host and query items."""


class DeepLinkStatus(str, Enum):
    MATCHED = "matched"
    MISSING_PARAMETER = "missing_parameter"
    UNRECOGNIZED = "unrecognized"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ParsedLink:
    scheme: str
    host: str
    # First occurrence of each key; None when the key had no "=value" part.
    query: dict[str, Optional[str]] = field(default_factory=dict)

    def param(self, name: str) -> Optional[str]:
        return self.query.get(name)


@dataclass(frozen=True)
class DeepLinkResult:
    """Outcome of resolving a link.

    ``destination`` is set only for MATCHED. UNRECOGNIZED hosts send the
    router back to its root; every other non-match leaves the stack alone.
    """

    status: DeepLinkStatus
    url: str
    host: Optional[str] = None
    destination: Optional[Destination] = None
    missing_parameter: Optional[str] = None
    reason: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.status is DeepLinkStatus.MATCHED


@dataclass(frozen=True)
class DeepLinkRoute:
    host: str
    build: Callable[..., Destination]
    # Query key carrying the identifier; None for hosts that take no parameter.
    parameter: Optional[str] = None


DEEP_LINK_ROUTES: dict[str, DeepLinkRoute] = {
    route.host: route
    for route in (
        DeepLinkRoute("product", ProductDetail, "id"),
        DeepLinkRoute("collection", CollectionDetail, "id"),
        DeepLinkRoute("boutique", BoutiqueDetail, "id"),
        DeepLinkRoute("ar", ARTryOn, "product"),
        DeepLinkRoute("configurator", WatchConfigurator, "product"),
        DeepLinkRoute("appointment", AppointmentBooking, "store"),
        DeepLinkRoute("orders", OrderHistory),
        DeepLinkRoute("order", OrderDetail, "id"),
        DeepLinkRoute("wishlist", WishlistDetail, "id"),
        DeepLinkRoute("settings", Settings),
    )
}


def _query_items(query: str) -> dict[str, Optional[str]]:
    items: dict[str, Optional[str]] = {}
    if not query:
        return items
    for chunk in query.split("&"):
        if not chunk:
            continue
        name, sep, value = chunk.partition("=")
        name = unquote(name)
        if name in items:
            continue
        items[name] = unquote(value) if sep else None
    return items


def parse_deep_link(url: str) -> ParsedLink:
    """Split a link into scheme, host and first-occurrence query items.

    Raises:
        MalformedDeepLink: if the URL cannot be split or has no host
    """
    if not isinstance(url, str):
        raise MalformedDeepLink(f"deep link must be a string, got {type(url).__name__}")
    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
    except ValueError as exc:
        raise MalformedDeepLink(f"cannot parse deep link {url!r}: {exc}") from exc
    if not host:
        raise MalformedDeepLink(f"deep link {url!r} has no host")
    # urlsplit lowercases hostname; keep the host as written for exact matching.
    netloc_host = parts.netloc.rsplit("@", 1)[-1].split(":", 1)[0]
    return ParsedLink(
        scheme=parts.scheme.lower(),
        host=unquote(netloc_host) or host,
        query=_query_items(parts.query),
    )


def resolve_deep_link(url: str, accepted_schemes: Optional[Iterable[str]] = None) -> DeepLinkResult:
    """Map a link onto a destination without touching any navigation state.

    Args:
        url: The incoming link
        accepted_schemes: If given and non-empty, links with any other scheme
            resolve as MALFORMED

    Returns:
        DeepLinkResult describing the match
    """
    try:
        parsed = parse_deep_link(url)
    except MalformedDeepLink as exc:
        return DeepLinkResult(DeepLinkStatus.MALFORMED, url=str(url), reason=str(exc))

    schemes = {s.lower() for s in (accepted_schemes or ())}
    if schemes and parsed.scheme not in schemes:
        return DeepLinkResult(
            DeepLinkStatus.MALFORMED,
            url=url,
            host=parsed.host,
            reason=f"scheme {parsed.scheme!r} is not accepted",
        )

    route = DEEP_LINK_ROUTES.get(parsed.host)
    if route is None:
        return DeepLinkResult(DeepLinkStatus.UNRECOGNIZED, url=url, host=parsed.host)

    if route.parameter is None:
        return DeepLinkResult(DeepLinkStatus.MATCHED, url=url, host=parsed.host, destination=route.build())

    value = parsed.param(route.parameter)
    if value is None:
        return DeepLinkResult(
            DeepLinkStatus.MISSING_PARAMETER,
            url=url,
            host=parsed.host,
            missing_parameter=route.parameter,
        )
    return DeepLinkResult(DeepLinkStatus.MATCHED, url=url, host=parsed.host, destination=route.build(value))
