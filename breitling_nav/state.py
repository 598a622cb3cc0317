"""Navigation roots for the app's tab bar."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .deeplinks import DeepLinkResult
from .destinations import Destination
from .router import NavigationRouter


class TabSelection(str, Enum):
    COLLECTIONS = "collections"
    SEARCH = "search"
    BOUTIQUES = "boutiques"
    ACCOUNT = "account"

    @property
    def title(self) -> str:
        return self.value.capitalize()

    @property
    def icon_name(self) -> str:
        return _TAB_ICONS[self]


_TAB_ICONS = {
    TabSelection.COLLECTIONS: "square.grid.2x2",
    TabSelection.SEARCH: "magnifyingglass",
    TabSelection.BOUTIQUES: "mappin.and.ellipse",
    TabSelection.ACCOUNT: "person.circle",
}


@dataclass
class AppNavigationState:
    """Per-tab routers plus the currently selected tab.

    Each tab is an independent navigation root with its own router, so
    pushing on one tab never affects another. Destinations pushed on any
    tab are recorded in ``session_history`` for debugging.
    """

    selected_tab: TabSelection = TabSelection.COLLECTIONS
    accepted_schemes: tuple[str, ...] = ()
    root_label: str = "Home"

    routers: dict[TabSelection, NavigationRouter] = field(default_factory=dict)
    session_history: list[tuple[TabSelection, Destination]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.selected_tab = TabSelection(self.selected_tab)
        for tab in TabSelection:
            if tab not in self.routers:
                self.routers[tab] = NavigationRouter(
                    accepted_schemes=self.accepted_schemes,
                    root_label=self.root_label,
                )
            self.routers[tab].subscribe(self._recorder(tab, self.routers[tab]))

    @classmethod
    def from_settings(cls, settings: object) -> "AppNavigationState":
        return cls(
            selected_tab=TabSelection(getattr(settings, "BN_DEFAULT_TAB", "collections")),
            accepted_schemes=tuple(getattr(settings, "BN_DEEP_LINK_SCHEMES", ()) or ()),
            root_label=str(getattr(settings, "BN_ROOT_LABEL", "Home")),
        )

    def _recorder(self, tab: TabSelection, router: NavigationRouter):
        # Seeded from the router so entries pushed before subscription don't count.
        seen = {"pushes": router.push_count}

        def _record(router: NavigationRouter, path: tuple[Destination, ...]) -> None:
            if router.push_count > seen["pushes"] and path:
                self.session_history.append((tab, path[-1]))
            seen["pushes"] = router.push_count

        return _record

    @property
    def router(self) -> NavigationRouter:
        """Router for the selected tab."""
        return self.routers[self.selected_tab]

    def router_for(self, tab: TabSelection | str) -> NavigationRouter:
        return self.routers[TabSelection(tab)]

    def select(self, tab: TabSelection | str) -> NavigationRouter:
        """Switch tabs. The previous tab keeps its stack."""
        self.selected_tab = TabSelection(tab)
        return self.router

    def handle_deep_link(self, url: str, tab: Optional[TabSelection | str] = None) -> DeepLinkResult:
        """Apply a deep link to ``tab`` (default: the selected tab)."""
        target = self.router if tab is None else self.router_for(tab)
        return target.handle_deep_link(url)

    def reset_all(self, tabs: Optional[Iterable[TabSelection]] = None) -> None:
        """Return every tab (or just ``tabs``) to its root screen."""
        for tab in tabs or TabSelection:
            self.routers[tab].navigate_to_root()

    def depths(self) -> dict[TabSelection, int]:
        return {tab: r.navigation_depth for tab, r in self.routers.items()}
