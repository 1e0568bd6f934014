"""Adapter configuration."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_BASE_URL = "https://api.getport.io"


@dataclass
class Config:
    """Configuration loaded from environment variables."""

    # Server
    host: str = field(default_factory=lambda: os.getenv("PORTAI_HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORTAI_PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("PORTAI_LOG_LEVEL", "INFO").upper())

    # Port API
    base_url: str = field(default_factory=lambda: os.getenv("PORT_BASE_URL", DEFAULT_BASE_URL))
    client_id: str = field(default_factory=lambda: os.getenv("PORT_CLIENT_ID", ""))
    client_secret: str = field(default_factory=lambda: os.getenv("PORT_CLIENT_SECRET", ""))

    # HTTP transport
    http_timeout: float = field(default_factory=lambda: float(os.getenv("PORTAI_HTTP_TIMEOUT", "300")))
    connect_timeout: float = field(default_factory=lambda: float(os.getenv("PORTAI_CONNECT_TIMEOUT", "10")))

    @property
    def has_credentials(self) -> bool:
        """Whether client credentials are available from the environment."""
        return bool(self.client_id and self.client_secret)


# Global config instance
config = Config()
