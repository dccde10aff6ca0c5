"""
Resolution context shared by one schema build.

Maps a resource title to either a placeholder (registered, not built yet)
or the finished object schema for that resource. Lazy references hold the
context and only look the title up when a value is actually checked.
"""

import logging
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from .description import ObjectSchema

logger = logging.getLogger(__name__)


class ResourceReferenceError(LookupError):
    """Raised when a lazy resource reference cannot be dereferenced"""

    def __init__(self, title: str, message: str):
        super().__init__(message)
        self.title = title


class UnknownResourceReference(ResourceReferenceError):
    """The referenced title was never registered in the context"""

    def __init__(self, title: str):
        super().__init__(title, f"Unknown resource reference: {title!r}")


class UnresolvedResourceReference(ResourceReferenceError):
    """The referenced title is registered but its schema is not built yet"""

    def __init__(self, title: str):
        super().__init__(title, f"Resource reference {title!r} dereferenced before its schema was built")


class ResolutionContext:
    """
    Title -> object schema registry with explicit placeholders

    Usage:
    ```python
    context = ResolutionContext()
    context.register("Book")          # pass 1
    context.define("Book", schema)    # pass 2
    context.resolve("Book")           # check time
    ```
    """

    def __init__(self):
        self._entries: Dict[str, Optional["ObjectSchema"]] = {}

    def register(self, title: str) -> None:
        """Insert an unresolved placeholder for a title (overwrites)"""
        self._entries[title] = None

    def define(self, title: str, schema: "ObjectSchema") -> None:
        """Store the finished schema for a title (overwrites)"""
        self._entries[title] = schema

    def is_registered(self, title: str) -> bool:
        return title in self._entries

    def is_defined(self, title: str) -> bool:
        return self._entries.get(title) is not None

    def titles(self) -> List[str]:
        return list(self._entries)

    def resolve(self, title: str) -> "ObjectSchema":
        """
        Return the finished schema for a title

        Raises:
            UnknownResourceReference: title was never registered
            UnresolvedResourceReference: title is still a placeholder
        """
        if title not in self._entries:
            logger.debug(f"Unknown resource reference: {title}")
            raise UnknownResourceReference(title)

        schema = self._entries[title]
        if schema is None:
            raise UnresolvedResourceReference(title)
        return schema

    def __contains__(self, title: object) -> bool:
        return title in self._entries

    def __len__(self) -> int:
        return len(self._entries)
