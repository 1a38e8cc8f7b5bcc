from dataclasses import dataclass, replace
from typing import Any, Callable, List, Optional, Union

from Relay.Exception.DispatcherError import DispatcherConfigError

HandlerList = List[Callable[..., Any]]
HandlerHook = Callable[[HandlerList], HandlerList]


"""Recognized dispatcher settings."""
@dataclass
class DispatcherOptions:
    delimiter: str = "."
    wildcard: Union[str, bool] = "*"
    store_handlers: Optional[HandlerHook] = None
    prepare_handlers: Optional[HandlerHook] = None
    separator: Optional[str] = None

    @property
    def double_wildcard(self) -> str:
        return f"{self.wildcard}{self.wildcard}"

    def normalized(self) -> "DispatcherOptions":
        """Return a validated copy, with `wildcard=True` meaning `*`."""
        wildcard = "*" if self.wildcard is True else self.wildcard
        if not isinstance(self.delimiter, str) or not self.delimiter:
            raise DispatcherConfigError("delimiter must be a non-empty string", "delimiter")
        if not isinstance(wildcard, str) or not wildcard:
            raise DispatcherConfigError("wildcard must be a non-empty string or True", "wildcard")
        if self.delimiter in wildcard:
            raise DispatcherConfigError(
                f"wildcard '{wildcard}' must not contain the delimiter '{self.delimiter}'", "wildcard"
            )
        if self.separator is not None:
            if not isinstance(self.separator, str) or not self.separator:
                raise DispatcherConfigError("separator must be a non-empty string", "separator")
            if self.separator == self.delimiter:
                raise DispatcherConfigError("separator must differ from the delimiter", "separator")
        return replace(self, wildcard=wildcard)
