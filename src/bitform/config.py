"""Application and provider configuration.

Both are frozen dataclasses — immutable after creation, no string-key
dict lookups. Provider defaults live in named constants and are applied
once, at provider construction, by ``merge_with_defaults()``.
"""

from dataclasses import dataclass, replace

DEFAULT_HOST = "localhost"
"""Host a provider binds to when none is configured."""

DEFAULT_PORT = 80
"""Port a provider binds to when none is configured."""


@dataclass(frozen=True, slots=True)
class ProviderConfig:
    """Where a provider listens.

    Unset fields mean "use the default"::

        config = ProviderConfig(port=8080)
        merge_with_defaults(config).host  # "localhost"
    """

    host: str | None = None
    port: int | None = None


def merge_with_defaults(config: ProviderConfig | None = None) -> ProviderConfig:
    """Return *config* with every unset field replaced by its default."""
    config = config or ProviderConfig()
    return replace(
        config,
        host=config.host or DEFAULT_HOST,
        port=config.port or DEFAULT_PORT,
    )


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    ``provide_apis`` is advisory: modules that can expose a JSON API
    next to their pages read it from ``Application.config``.
    """

    provide_apis: bool = False
