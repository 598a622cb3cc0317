"""Tests for per-tab navigation roots."""
from __future__ import annotations

from types import SimpleNamespace

import pytest

from breitling_nav import destinations as d
from breitling_nav.deeplinks import DeepLinkStatus
from breitling_nav.router import NavigationRouter
from breitling_nav.state import AppNavigationState, TabSelection


def test_state_initial_values():
    state = AppNavigationState()
    assert state.selected_tab is TabSelection.COLLECTIONS
    assert set(state.routers) == set(TabSelection)
    assert all(depth == 0 for depth in state.depths().values())
    assert state.session_history == []


def test_tabs_have_independent_routers():
    state = AppNavigationState()
    state.router.show_collection("navitimer")

    state.select(TabSelection.SEARCH)
    assert state.router.is_at_root

    state.router.navigate(d.SearchResults("chronomat"))
    assert state.router_for("collections").path == (d.CollectionDetail("navitimer"),)
    assert state.router_for(TabSelection.SEARCH).path == (d.SearchResults("chronomat"),)


def test_select_keeps_previous_stack():
    state = AppNavigationState()
    state.router.show_product("AB0138")
    state.select("account")
    state.select("collections")
    assert state.router.path == (d.ProductDetail("AB0138"),)


def test_select_unknown_tab_raises():
    state = AppNavigationState()
    with pytest.raises(ValueError):
        state.select("cart")


def test_deep_link_goes_to_selected_tab():
    state = AppNavigationState(selected_tab=TabSelection.BOUTIQUES)
    result = state.handle_deep_link("app://boutique?id=geneva")

    assert result.status is DeepLinkStatus.MATCHED
    assert state.router_for("boutiques").path == (d.BoutiqueDetail("geneva"),)
    assert state.router_for("collections").is_at_root


def test_deep_link_to_explicit_tab():
    state = AppNavigationState()
    state.handle_deep_link("app://orders", tab="account")
    assert state.router_for("account").path == (d.OrderHistory(),)
    assert state.router.is_at_root


def test_reset_all():
    state = AppNavigationState()
    state.router_for("collections").show_product("a")
    state.router_for("account").show_settings()

    state.reset_all()
    assert state.depths() == {tab: 0 for tab in TabSelection}


def test_reset_selected_tabs_only():
    state = AppNavigationState()
    state.router_for("collections").show_product("a")
    state.router_for("account").show_settings()

    state.reset_all([TabSelection.ACCOUNT])
    assert state.router_for("collections").navigation_depth == 1
    assert state.router_for("account").is_at_root


def test_session_history_records_visits():
    state = AppNavigationState()
    router = state.router
    router.show_collection("avenger")
    router.show_product("a")
    router.navigate_back()
    router.replace(d.CollectionDetail("navitimer"))
    router.navigate_back(0)
    state.router_for("account").show_settings()

    assert state.session_history == [
        (TabSelection.COLLECTIONS, d.CollectionDetail("avenger")),
        (TabSelection.COLLECTIONS, d.ProductDetail("a")),
        (TabSelection.COLLECTIONS, d.CollectionDetail("navitimer")),
        (TabSelection.ACCOUNT, d.Settings()),
    ]


def test_from_settings():
    settings = SimpleNamespace(
        BN_DEFAULT_TAB="account",
        BN_DEEP_LINK_SCHEMES=["breitling"],
        BN_ROOT_LABEL="Start",
    )
    state = AppNavigationState.from_settings(settings)

    assert state.selected_tab is TabSelection.ACCOUNT
    assert state.router.accepted_schemes == ("breitling",)
    state.handle_deep_link("other://orders")
    assert state.router.is_at_root
    state.router.show_settings()
    assert state.router.breadcrumbs() == "Start > Settings"


def test_tab_titles_and_icons():
    assert TabSelection.BOUTIQUES.title == "Boutiques"
    assert TabSelection.ACCOUNT.icon_name == "person.circle"


def test_session_history_records_replace_with_current():
    state = AppNavigationState()
    router = state.router
    router.show_product("a")
    router.replace(router.current)

    assert state.session_history == [
        (TabSelection.COLLECTIONS, d.ProductDetail("a")),
        (TabSelection.COLLECTIONS, d.ProductDetail("a")),
    ]


def test_session_history_ignores_pops_on_prepopulated_router():
    search = NavigationRouter()
    search.navigate(d.SearchResults("chronomat"))
    search.show_product("a")

    state = AppNavigationState(routers={TabSelection.SEARCH: search})
    search.navigate_back()
    assert state.session_history == []

    search.show_product("b")
    assert state.session_history == [(TabSelection.SEARCH, d.ProductDetail("b"))]
