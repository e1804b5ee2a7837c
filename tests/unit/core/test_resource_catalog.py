import pytest

from rolegate.core.errors import DuplicateResourceError, FrozenModelError, UnknownResourceError
from rolegate.core.resources import ResourceCatalog


def test_add_and_query_actions():
    c = ResourceCatalog()
    c.add_resource("login", ["index", "submit"])
    assert c.has_resource("login")
    assert "login" in c
    assert c.has_action("login", "submit")
    assert not c.has_action("login", "delete")
    assert c.actions("login") == ("index", "submit")


def test_duplicate_resource_rejected():
    c = ResourceCatalog()
    c.add_resource("shop", ["index"])
    with pytest.raises(DuplicateResourceError):
        c.add_resource("shop", ["view"])


def test_duplicate_detection_uses_normalized_name():
    c = ResourceCatalog()
    c.add_resource("userProfile", ["index"])
    with pytest.raises(DuplicateResourceError):
        c.add_resource("UserProfile", ["index"])


def test_all_sentinel_accepts_any_action_but_is_not_listed():
    c = ResourceCatalog()
    c.add_resource("api", ["get", "*"])
    assert c.has_action("api", "get")
    assert c.has_action("api", "anything")
    assert c.accepts_any_action("api")
    assert c.actions("api") == ("get",)


def test_identifiers_are_normalized():
    c = ResourceCatalog()
    c.add_resource("Orders", ["List", "showDetail"])
    assert c.actions("orders") == ("list", "showDetail")
    assert c.has_action("Orders", "List")


def test_duplicate_actions_are_dropped():
    c = ResourceCatalog()
    c.add_resource("a", ["x", "y", "x"])
    assert c.actions("a") == ("x", "y")


def test_unknown_resource_raises():
    c = ResourceCatalog()
    with pytest.raises(UnknownResourceError):
        c.has_action("ghost", "index")
    with pytest.raises(UnknownResourceError):
        c.actions("ghost")


def test_invalid_resource_identifier():
    c = ResourceCatalog()
    with pytest.raises(ValueError):
        c.add_resource("*", ["index"])
    with pytest.raises(ValueError):
        c.add_resource("", ["index"])


def test_resources_is_ordered_and_restartable():
    c = ResourceCatalog()
    c.add_resource("b", ["1"])
    c.add_resource("a", ["2"])
    view = c.resources()
    first = list(view)
    second = list(view)
    assert first == [("b", ("1",)), ("a", ("2",))]
    assert first == second
    assert len(view) == 2


def test_frozen_catalog_rejects_new_resources():
    c = ResourceCatalog()
    c.add_resource("a", ["x"])
    c.freeze()
    with pytest.raises(FrozenModelError):
        c.add_resource("b", ["y"])


def test_non_string_actions_are_rejected():
    c = ResourceCatalog()
    with pytest.raises(ValueError):
        c.add_resource("switch", [True, False])  # type: ignore[list-item]
    assert "switch" not in c
