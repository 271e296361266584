"""Connection settings for the Consul client."""

import os
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

DEFAULT_ADDRESS = "http://127.0.0.1:8500"
DEFAULT_TIMEOUT = 30.0


def normalize_address(address: str) -> str:
    """Return ``address`` with a scheme and without a trailing slash.

    ``127.0.0.1:8500`` becomes ``http://127.0.0.1:8500``.
    """
    address = (address or "").strip()
    if not address:
        raise ValueError("Consul server address must not be empty")
    if "://" not in address:
        address = f"http://{address}"
    parsed = urlparse(address)
    if not parsed.netloc:
        raise ValueError(f"Invalid Consul server address: {address!r}")
    return address.rstrip("/")


@dataclass
class Config:
    address: str = DEFAULT_ADDRESS
    token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        self.address = normalize_address(self.address)
        self.token = self.token or None

    @classmethod
    def load(
        cls,
        address: Optional[str] = None,
        token: Optional[str] = None,
        fallback_address: Optional[str] = None,
        fallback_token: Optional[str] = None,
    ) -> "Config":
        """Build a config from explicit values, the environment, then fallbacks.

        Explicit arguments win over ``CONSUL_HTTP_ADDR`` / ``CONSUL_HTTP_TOKEN``
        (a ``.env`` file is honoured), which win over the fallbacks, which
        usually come from the user's config file.
        """
        load_dotenv()
        return cls(
            address=address
            or os.getenv("CONSUL_HTTP_ADDR")
            or fallback_address
            or DEFAULT_ADDRESS,
            token=token or os.getenv("CONSUL_HTTP_TOKEN") or fallback_token,
        )
