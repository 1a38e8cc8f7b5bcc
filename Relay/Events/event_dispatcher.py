"""
Wildcard pattern EventDispatcher.
Subscriptions are stored in a trie keyed by pattern segment (see `PatternNode`).
`*` matches exactly one segment, `**` matches the node it is attached to and
everything below it.

    dispatcher = EventDispatcher()
    dispatcher.on("user.*.created", on_created)
    dispatcher.on("user.**", audit)
    dispatcher.emit("user.42.created", payload)

Not thread-safe: registration and emission mutate and read the trie directly.
"""
import asyncio
import inspect
import logging
from typing import Any, Callable, List, Optional, Sequence, Union

from Relay.Events.pattern_node import PatternNode
from Relay.Model.DispatcherOptions import DispatcherOptions, HandlerHook

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]
Pattern = Union[str, Sequence[str]]


class EventDispatcher:

    def __init__(
        self,
        delimiter: str = ".",
        wildcard: Union[str, bool] = "*",
        store_handlers: Optional[HandlerHook] = None,
        prepare_handlers: Optional[HandlerHook] = None,
        separator: Optional[str] = None,
    ):
        self.options = DispatcherOptions(
            delimiter=delimiter,
            wildcard=wildcard,
            store_handlers=store_handlers,
            prepare_handlers=prepare_handlers,
            separator=separator,
        ).normalized()
        self.delimiter = self.options.delimiter
        self.wildcard = self.options.wildcard
        self.double_wildcard = self.options.double_wildcard
        self.store_handlers = self.options.store_handlers
        self.prepare_handlers = self.options.prepare_handlers
        self.separator = self.options.separator
        # Name of the event most recently emitted. Shared by nested and
        # concurrent emissions, last write wins.
        self.event: Optional[str] = None
        self._root = PatternNode()

    @classmethod
    def from_options(cls, options: DispatcherOptions) -> "EventDispatcher":
        return cls(
            delimiter=options.delimiter,
            wildcard=options.wildcard,
            store_handlers=options.store_handlers,
            prepare_handlers=options.prepare_handlers,
            separator=options.separator,
        )

    def _patterns(self, pattern: Pattern) -> Optional[List[str]]:
        """Expand a list (or separator-joined string) of patterns, None for a single one."""
        if isinstance(pattern, str):
            if self.separator and self.separator in pattern:
                return pattern.split(self.separator)
            return None
        return list(pattern)

    def _store(self, bucket: List[Handler]) -> List[Handler]:
        return self.store_handlers(bucket) if self.store_handlers else bucket

    def on(self, pattern: Pattern, handler: Handler) -> None:
        """Register `handler` for `pattern` (or for every pattern in a list)."""
        if not handler:
            return
        patterns = self._patterns(pattern)
        if patterns is not None:
            for item in patterns:
                self.on(item, handler)
            return

        scan = self._root
        for part in pattern.split(self.delimiter):
            if part == self.wildcard:
                scan = scan.wildcard()
            elif part == self.double_wildcard:
                scan.below_handlers.append(handler)
                scan.below_handlers = self._store(scan.below_handlers)
                logger.debug("Registered below-wildcard handler for %s", pattern)
                return
            else:
                scan = scan.child(part)
        scan.handlers.append(handler)
        scan.handlers = self._store(scan.handlers)
        logger.debug("Registered handler for %s", pattern)

    def once(self, pattern: Pattern, handler: Handler) -> Callable[[], None]:
        """
        Register `handler` to fire a single time. When a list of patterns is
        given, only the first one to fire invokes it. Returns a function that
        cancels the registration.
        """
        if not handler:
            return lambda: None

        def process(*args):
            self.off(pattern, process)
            return handler(*args)

        self.on(pattern, process)

        def cancel() -> None:
            self.off(pattern, process)

        return cancel

    def off(self, pattern: Pattern, handler: Optional[Handler] = None) -> None:
        """Remove the first registration of `handler`, or every handler when omitted."""
        patterns = self._patterns(pattern)
        if patterns is not None:
            for item in patterns:
                self.off(item, handler)
            return

        scan = self._root
        for part in pattern.split(self.delimiter):
            if part == self.wildcard:
                scan = scan.wildcard_child
            elif part == self.double_wildcard:
                if handler is None:
                    scan.below_handlers = []
                    logger.debug("Cleared below-wildcard handlers for %s", pattern)
                else:
                    _remove_first(scan.below_handlers, handler)
                return
            else:
                scan = scan.existing(part)
            if scan is None:
                return

        if handler is None:
            del scan.handlers[:]
            logger.debug("Cleared handlers for %s", pattern)
        else:
            _remove_first(scan.handlers, handler)

    def remove_all_listeners(self) -> None:
        self._root = PatternNode()
        logger.debug("Removed all listeners")

    def _split(self, event: str) -> List[str]:
        self.event = event
        logger.debug("Emitting %s", event)
        return event.split(self.delimiter)

    def emit(self, event: str, *args) -> tuple:
        """Call every matching handler synchronously. Handler exceptions propagate."""
        parts = self._split(event)
        _walk(self._root, parts, 0, lambda fn: fn(*args))
        return args

    async def emit_async_sequential(self, event: str, *args) -> tuple:
        """Collect every matching handler, then call and await them one at a time."""
        handlers: List[Handler] = []
        parts = self._split(event)
        _collect(self._root, parts, 0, handlers)
        if self.prepare_handlers:
            handlers = self.prepare_handlers(handlers)
        for handler in handlers:
            result = handler(*args)
            if inspect.isawaitable(result):
                await result
        return args

    async def emit_async(self, event: str, *args) -> tuple:
        """Start every matching handler, then wait for all of them together."""
        pending = []

        def call(fn):
            result = fn(*args)
            if inspect.isawaitable(result):
                pending.append(asyncio.ensure_future(result))

        parts = self._split(event)
        _walk(self._root, parts, 0, call)
        if pending:
            await asyncio.gather(*pending)
        return args

    add_event_listener = on
    remove_event_listener = off
    add_listener = on
    remove_listener = off


def _remove_first(bucket: List[Handler], handler: Handler) -> None:
    for i, item in enumerate(bucket):
        if item is handler:
            del bucket[i]
            return


def _is_live(bucket: List[Handler], handler: Handler) -> bool:
    return any(item is handler for item in bucket)


def _call_backward(bucket: List[Handler], call: Callable[[Handler], None]) -> None:
    # Newest registration first. Walks a snapshot; entries removed from the
    # bucket before their turn are skipped.
    for handler in reversed(tuple(bucket)):
        if _is_live(bucket, handler):
            call(handler)


def _call_forward(bucket: List[Handler], call: Callable[[Handler], None]) -> None:
    for handler in tuple(bucket):
        if _is_live(bucket, handler):
            call(handler)


def _walk(scan: Optional[PatternNode], parts: List[str], index: int, call: Callable[[Handler], None]) -> None:
    """Eager walk: call handlers as they are found."""
    while scan is not None and index < len(parts):
        _call_backward(scan.below_handlers, call)
        if scan.wildcard_child is not None:
            _walk(scan.wildcard_child, parts, index + 1, call)
        scan = scan.children.get(parts[index])
        index += 1
    if scan is not None:
        _call_backward(scan.below_handlers, call)
        _call_forward(scan.handlers, call)


def _collect(scan: Optional[PatternNode], parts: List[str], index: int, handlers: List[Handler]) -> None:
    """Collecting walk: same traversal as `_walk`, below buckets in registration order."""
    while scan is not None and index < len(parts):
        handlers.extend(scan.below_handlers)
        if scan.wildcard_child is not None:
            _collect(scan.wildcard_child, parts, index + 1, handlers)
        scan = scan.children.get(parts[index])
        index += 1
    if scan is not None:
        handlers.extend(scan.below_handlers)
        handlers.extend(scan.handlers)
