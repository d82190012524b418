"""Process-wide configuration for the Jina tools server.

``PackConfig`` is created once at start-up and handed to the endpoint manager
as read-only context. ``ServerSettings`` holds what the HTTP entry point reads
from the environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple
from urllib.parse import urlsplit

import keyring
from keyring.errors import KeyringError

# ──────────────────────────────────────────────────────────────────────────────
# 🔧  Network & authentication
# ──────────────────────────────────────────────────────────────────────────────

SERVICE_NAME = "jina-tools-mcp"
KEY_NAME = "jina-api-key"
API_KEY_ENV = "JINA_API_KEY"


@dataclass(frozen=True)
class PackConfig:
    """Network allow-list and authentication scheme shared by every operation"""
    network_domains: Tuple[str, ...] = ("jina.ai",)
    auth_scheme: str = "Bearer"

    def is_allowed_url(self, url: str) -> bool:
        host = (urlsplit(url).hostname or "").lower()
        return any(
            host == domain or host.endswith("." + domain)
            for domain in self.network_domains
        )

    def authorization(self, credential: str) -> str:
        return f"{self.auth_scheme} {credential}"


DEFAULT_CONFIG = PackConfig()


# ──────────────────────────────────────────────────────────────────────────────
# 🔑  API key lookup (environment first, then the OS keyring)
# ──────────────────────────────────────────────────────────────────────────────

def resolve_api_key() -> Optional[str]:
    """Return the Jina API key, or None when none is configured.

    The key is read on every call and never cached.
    """
    api_key = os.getenv(API_KEY_ENV)
    if api_key:
        return api_key
    try:
        return keyring.get_password(SERVICE_NAME, KEY_NAME)
    except KeyringError as exc:
        logging.warning(f"[Config] Keyring lookup failed: {exc}")
        return None


@dataclass(frozen=True)
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(cls) -> "ServerSettings":
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", 8080)),
        )


__all__ = [
    "PackConfig",
    "DEFAULT_CONFIG",
    "ServerSettings",
    "resolve_api_key",
    "SERVICE_NAME",
    "KEY_NAME",
    "API_KEY_ENV",
]
