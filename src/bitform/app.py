"""Bitform application — the composition root.

Collects one provider, any number of modules, and any number of
storage providers, then boots them in a fixed order and starts serving.
"""

import logging
from typing import TypeAlias

from bitform.config import AppConfig
from bitform.errors import ConfigurationError
from bitform.module import Module
from bitform.provider import Provider
from bitform.storage import StorageProvider

logger = logging.getLogger("bitform.app")

Usable: TypeAlias = Module | Provider | StorageProvider


class Application:
    """The bitform application.

    Usage::

        app = Application()
        app.use(AsgiProvider(ProviderConfig(port=8000)))
        app.use(MemoryStorage())
        app.use(Blog())
        app.run()

    Boot order is fixed: every storage's ``setup()``, then every
    module's ``load()``, then every module's ``prepare(provider)``
    (which loads its pages). Each group runs in the order ``use()``
    was called. Nothing is isolated: the first failure aborts the boot
    and propagates unchanged.
    """

    __slots__ = ("_config", "_modules", "_provider", "_storages")

    def __init__(self, config: AppConfig | None = None) -> None:
        self._config: AppConfig = config or AppConfig()
        self._provider: Provider | None = None
        self._modules: list[Module] = []
        self._storages: list[StorageProvider] = []

    def __repr__(self) -> str:
        return (
            f"Application(provider={self._provider!r}, "
            f"modules={len(self._modules)}, storages={len(self._storages)})"
        )

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def provider(self) -> Provider | None:
        return self._provider

    @property
    def modules(self) -> tuple[Module, ...]:
        return tuple(self._modules)

    @property
    def storages(self) -> tuple[StorageProvider, ...]:
        return tuple(self._storages)

    # -- Composition --

    def use(self, usable: Usable) -> "Application":
        """Add a module or storage provider, or set the provider.

        A new provider replaces the previous one, which is dropped
        without teardown. Modules and storages are appended.
        """
        match usable:
            case Provider():
                if self._provider is not None and self._provider is not usable:
                    logger.info("Replacing provider %r with %r", self._provider, usable)
                self._provider = usable
            case Module():
                self._modules.append(usable)
            case StorageProvider():
                self._storages.append(usable)
            case _:
                msg = (
                    f"Cannot use {type(usable).__name__!r}: expected a Module, "
                    "Provider, or StorageProvider."
                )
                raise TypeError(msg)
        return self

    # -- Lifecycle --

    def run(self) -> None:
        """Prepare everything, then start the provider.

        Raises ``ConfigurationError`` before touching any storage or
        module when no provider was set. ``start()`` blocks for the
        lifetime of the process.
        """
        provider = self._require_provider()
        self.prepare()
        logger.info("Starting %r", provider)
        provider.start()

    def prepare(self) -> None:
        """Boot storages and modules and register every page's routes.

        Raises ``ConfigurationError`` when no provider was set. Any
        exception from a storage, module, or page propagates and stops
        the remaining steps.
        """
        provider = self._require_provider()

        for storage in self._storages:
            logger.debug("Setting up storage %r", storage)
            try:
                storage.setup()
            except Exception:
                logger.error("Storage %r failed during setup; aborting boot", storage)
                raise

        for module in self._modules:
            logger.debug("Loading module %r", module)
            try:
                module.load()
            except Exception:
                logger.error("Module %r failed to load; aborting boot", module)
                raise

        for module in self._modules:
            logger.debug("Preparing module %r", module)
            try:
                module.prepare(provider)
            except Exception:
                logger.error("Module %r failed to register its pages; aborting boot", module)
                raise

        logger.info(
            "Prepared %d storage(s), %d module(s), %d route(s)",
            len(self._storages),
            len(self._modules),
            len(provider.routes),
        )

    def _require_provider(self) -> Provider:
        if self._provider is None:
            msg = "No provider was set. Call app.use(provider) before app.run()."
            raise ConfigurationError(msg)
        return self._provider
