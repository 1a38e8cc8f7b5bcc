from Relay.Events.event_dispatcher import EventDispatcher
from Relay.Events.pattern_node import PatternNode


def test_child_is_created_once():
    node = PatternNode()
    a = node.child("a")
    assert node.child("a") is a
    assert node.existing("a") is a
    assert node.existing("b") is None
    assert "b" not in node.children


def test_wildcard_child_is_lazy_and_idempotent():
    node = PatternNode()
    assert node.wildcard_child is None
    wild = node.wildcard()
    assert node.wildcard() is wild
    assert node.wildcard_child is wild


def test_wildcard_tokens_never_become_literal_children():
    disp = EventDispatcher()
    disp.on("a.*.b", lambda: None)
    disp.on("a.**", lambda: None)
    a = disp._root.children["a"]
    assert set(a.children) == set()
    assert a.wildcard_child is not None
    assert "b" in a.wildcard_child.children
    assert len(a.below_handlers) == 1
    assert a.handlers == []


def test_segments_after_below_wildcard_are_ignored():
    disp = EventDispatcher()
    h = lambda: None
    disp.on("a.**.ignored", h)
    a = disp._root.children["a"]
    assert a.below_handlers == [h]
    assert a.children == {}


def test_off_leaves_empty_nodes_in_place():
    disp = EventDispatcher()
    h = lambda: None
    disp.on("a.b.c", h)
    disp.off("a.b.c", h)
    c = disp._root.children["a"].children["b"].children["c"]
    assert c.handlers == []
