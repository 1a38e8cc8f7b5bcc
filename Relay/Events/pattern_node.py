"""
Trie node used by the dispatcher. One node per literal segment at a given
depth, plus a lazily created wildcard child and a bucket of handlers that
match the node and everything below it.
"""
from typing import Any, Callable, Dict, List, Optional


class PatternNode:
    __slots__ = ("children", "handlers", "wildcard_child", "below_handlers")

    def __init__(self):
        self.children: Dict[str, "PatternNode"] = {}
        self.handlers: List[Callable[..., Any]] = []
        self.wildcard_child: Optional["PatternNode"] = None
        self.below_handlers: List[Callable[..., Any]] = []

    def child(self, segment: str) -> "PatternNode":
        node = self.children.get(segment)
        if node is None:
            node = self.children[segment] = PatternNode()
        return node

    def existing(self, segment: str) -> Optional["PatternNode"]:
        return self.children.get(segment)

    def wildcard(self) -> "PatternNode":
        if self.wildcard_child is None:
            self.wildcard_child = PatternNode()
        return self.wildcard_child

    def __repr__(self) -> str:
        return (
            f"PatternNode(children={list(self.children)}, handlers={len(self.handlers)}, "
            f"below={len(self.below_handlers)}, wildcard={self.wildcard_child is not None})"
        )
