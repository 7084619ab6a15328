"""Bitform — a pluggable HTTP-serving framework.

An application composes one provider (the backend that serves HTTP),
any number of modules (feature bundles that register pages), and any
number of storage providers, then calls ``run()``.

Basic usage::

    from bitform import Application, AsgiProvider, Module, ProviderConfig

    class Hello(Module):
        def __init__(self) -> None:
            super().__init__("hello")

        def load(self) -> None:
            pass

    hello = Hello()

    @hello.page
    def index(provider):
        provider.get("/", lambda request, response: "Hello, World!")

    app = Application()
    app.use(AsgiProvider(ProviderConfig(port=8000))).use(hello)
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "ALL_METHODS",
    "AppConfig",
    "Application",
    "AsgiProvider",
    "BitformError",
    "CallbackPage",
    "ConfigurationError",
    "Cookie",
    "CookieOptions",
    "Data",
    "HTTPError",
    "MemoryStorage",
    "MethodNotAllowed",
    "Module",
    "NotAcceptable",
    "NotFound",
    "Page",
    "Provider",
    "ProviderConfig",
    "Request",
    "Response",
    "Route",
    "RouteMethod",
    "Router",
    "Storable",
    "StorageProvider",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import bitform`` fast while providing a clean top-level API.
    """
    if name == "Application":
        from bitform.app import Application

        return Application

    if name in ("AppConfig", "ProviderConfig"):
        from bitform import config as _config

        return getattr(_config, name)

    if name in ("Module", "Page", "CallbackPage"):
        from bitform import module as _module

        return getattr(_module, name)

    if name == "Provider":
        from bitform.provider import Provider

        return Provider

    if name == "AsgiProvider":
        from bitform.providers.asgi import AsgiProvider

        return AsgiProvider

    if name in ("StorageProvider", "Storable", "Data", "MemoryStorage"):
        from bitform import storage as _storage

        return getattr(_storage, name)

    if name in ("Route", "RouteMethod", "ALL_METHODS", "Router"):
        from bitform.routing import methods as _methods
        from bitform.routing import route as _route
        from bitform.routing import router as _router

        for source in (_methods, _route, _router):
            if hasattr(source, name):
                return getattr(source, name)

    if name == "Request":
        from bitform.http.request import Request

        return Request

    if name == "Response":
        from bitform.http.response import Response

        return Response

    if name in ("Cookie", "CookieOptions"):
        from bitform.http import cookies as _cookies

        return getattr(_cookies, name)

    if name in (
        "BitformError",
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotAcceptable",
        "NotFound",
    ):
        from bitform import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
