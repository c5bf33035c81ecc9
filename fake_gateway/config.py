"""Configuration management for fake-gateway."""

from dataclasses import dataclass, field

from fake_gateway.exceptions import ConfigurationError

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass
class ServerConfig:
    """HTTP server configuration."""

    host: str = "127.0.0.1"
    port: int = 3000

    @property
    def base_url(self) -> str:
        """Get the URL clients should point their gateway SDK at."""
        return f"http://{self.host}:{self.port}"


@dataclass
class GatewayConfig:
    """Main configuration for fake-gateway."""

    merchant_id: str = "fake-merchant"
    decline_all_cards: bool = False
    currency_iso_code: str = "USD"
    seed: int | None = None
    locale: str = "en_US"
    log_level: str = "INFO"
    log_format: str = "standard"
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def from_env(cls) -> "GatewayConfig":
        """Create config from environment variables."""
        import os

        server = ServerConfig(
            host=os.getenv("FAKE_GATEWAY_HOST", "127.0.0.1"),
            port=_parse_int("FAKE_GATEWAY_PORT", os.getenv("FAKE_GATEWAY_PORT", "3000")),
        )

        seed = os.getenv("SEED")

        return cls(
            merchant_id=os.getenv("FAKE_GATEWAY_MERCHANT_ID", "fake-merchant"),
            decline_all_cards=_parse_bool(
                "FAKE_GATEWAY_DECLINE_ALL_CARDS",
                os.getenv("FAKE_GATEWAY_DECLINE_ALL_CARDS", "false"),
            ),
            currency_iso_code=os.getenv("FAKE_GATEWAY_CURRENCY", "USD"),
            seed=_parse_int("SEED", seed) if seed else None,
            locale=os.getenv("FAKER_LOCALE", "en_US"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            server=server,
        )


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from e


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")
