"""Modules and pages — the feature bundles an application is built from.

A ``Module`` owns an ordered list of ``Page`` objects. When the
application prepares, each module first loads itself, then every page
registers its routes on the provider, in the order pages were added.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from bitform._internal.types import PageLoader

if TYPE_CHECKING:
    from bitform.provider import Provider


class Page(ABC):
    """A unit that registers routes on a provider."""

    @abstractmethod
    def load(self, provider: "Provider") -> None:
        """Register this page's routes on *provider*."""


class CallbackPage(Page):
    """A page backed by a plain ``(provider) -> None`` function."""

    __slots__ = ("_loader",)

    def __init__(self, loader: PageLoader) -> None:
        self._loader = loader

    def __repr__(self) -> str:
        return f"CallbackPage({getattr(self._loader, '__qualname__', self._loader)!r})"

    def load(self, provider: "Provider") -> None:
        self._loader(provider)


class Module(ABC):
    """A feature bundle: a name, an optional mount path, and its pages.

    Subclasses implement ``load()`` for self-initialization. ``load()``
    runs after every storage is set up and before any page registers
    routes; it does not get the provider.

    Usage::

        class Blog(Module):
            def __init__(self) -> None:
                super().__init__("Blog", path="/blog")
                self.add(PostsPage())

            def load(self) -> None:
                self.posts = []

        blog = Blog()

        @blog.page
        def feed(provider):
            provider.get("/blog/feed", render_feed)
    """

    def __init__(self, name: str, slug: str | None = None, path: str | None = None) -> None:
        self._name = name
        self._slug = slug or name
        self._path = path
        self._pages: list[Page] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self._name!r}, pages={len(self._pages)})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def slug(self) -> str:
        return self._slug

    @property
    def path(self) -> str | None:
        """Mount path pages can use as a ``group()`` prefix."""
        return self._path

    @property
    def pages(self) -> tuple[Page, ...]:
        return tuple(self._pages)

    def add(self, page: Page) -> "Module":
        """Append *page*. Pages are never removed or reordered."""
        self._pages.append(page)
        return self

    def page(self, loader: PageLoader) -> PageLoader:
        """Decorator: register a function as a page of this module."""
        self.add(CallbackPage(loader))
        return loader

    @abstractmethod
    def load(self) -> None:
        """Initialize the module before its pages are loaded."""

    def prepare(self, provider: "Provider") -> None:
        """Load every page against *provider*, in the order they were added."""
        for page in self._pages:
            page.load(provider)
