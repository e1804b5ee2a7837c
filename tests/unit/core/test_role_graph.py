import pytest

from rolegate.core.errors import CycleError, FrozenModelError, UnknownRoleError
from rolegate.core.roles import RoleGraph


def _graph():
    g = RoleGraph(["admin", "editor", "author", "guest"])
    g.add_inherit("admin", "editor")
    g.add_inherit("admin", "guest")
    g.add_inherit("editor", "author")
    g.add_inherit("author", "guest")
    return g


def test_add_role_is_idempotent():
    g = RoleGraph()
    g.add_role("guest")
    g.add_role("guest")
    assert list(g.roles()) == ["guest"]
    assert len(g) == 1


def test_add_role_rejects_empty_identifier():
    with pytest.raises(ValueError):
        RoleGraph().add_role("")


def test_add_inherit_requires_registered_roles():
    g = RoleGraph(["admin"])
    with pytest.raises(UnknownRoleError) as e:
        g.add_inherit("admin", "ghost")
    assert e.value.role == "ghost"
    with pytest.raises(UnknownRoleError):
        g.add_inherit("ghost", "admin")


def test_two_node_cycle_is_rejected():
    g = RoleGraph(["a", "b"])
    g.add_inherit("a", "b")
    with pytest.raises(CycleError) as e:
        g.add_inherit("b", "a")
    assert e.value.path == ("b", "a", "b")
    # the rejected edge was not stored
    assert g.parents_of("b") == ()


def test_self_inheritance_is_a_cycle():
    g = RoleGraph(["a"])
    with pytest.raises(CycleError):
        g.add_inherit("a", "a")


def test_long_cycle_is_rejected():
    g = RoleGraph(["a", "b", "c"])
    g.add_inherit("a", "b")
    g.add_inherit("b", "c")
    with pytest.raises(CycleError) as e:
        g.add_inherit("c", "a")
    assert "c -> a -> b -> c" in str(e.value)


def test_duplicate_edge_is_ignored():
    g = RoleGraph(["a", "b"])
    g.add_inherit("a", "b")
    g.add_inherit("a", "b")
    assert g.parents_of("a") == ("b",)


def test_inherits_is_reflexive_and_transitive():
    g = _graph()
    assert g.inherits("admin", "admin")
    assert g.inherits("admin", "author")
    assert g.inherits("editor", "guest")
    assert not g.inherits("guest", "admin")
    assert not g.inherits("author", "editor")


def test_inherits_unknown_role_raises():
    with pytest.raises(UnknownRoleError):
        _graph().inherits("nobody", "guest")


def test_lineage_is_breadth_first_in_registration_order():
    # guest is a direct parent of admin, so it comes before author
    assert _graph().lineage("admin") == ("admin", "editor", "guest", "author")
    assert _graph().lineage("guest") == ("guest",)


def test_diamond_lists_each_role_once():
    g = RoleGraph(["top", "left", "right", "base"])
    g.add_inherit("top", "left")
    g.add_inherit("top", "right")
    g.add_inherit("left", "base")
    g.add_inherit("right", "base")
    assert g.lineage("top") == ("top", "left", "right", "base")


def test_frozen_graph_rejects_mutation():
    g = _graph()
    g.freeze()
    assert g.frozen
    with pytest.raises(FrozenModelError):
        g.add_role("new")
    with pytest.raises(FrozenModelError):
        g.add_inherit("guest", "author")
    # reads still work
    assert g.inherits("admin", "guest")
