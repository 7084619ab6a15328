"""A provider that registers routes but never serves.

Useful for unit-testing modules and pages: run ``Application.prepare()``
or ``run()`` against it, then inspect ``routes`` or ``resolve()``
directly. ``start()`` only records that it was called.
"""

import logging

from bitform.config import ProviderConfig
from bitform.provider import Provider

logger = logging.getLogger("bitform.server")


class RecordingProvider(Provider):
    """Provider whose ``start()`` returns immediately.

    Usage::

        provider = RecordingProvider()
        Application().use(provider).use(Blog()).run()
        assert provider.started
        provider.resolve("GET", "/blog/feed")
    """

    def __init__(self, config: ProviderConfig | None = None) -> None:
        super().__init__(config)
        self.start_count = 0

    @property
    def started(self) -> bool:
        return self.start_count > 0

    def start(self) -> None:
        self.start_count += 1
        logger.debug("%r started without serving", self)
