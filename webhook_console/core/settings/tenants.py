"""Console tenants: operator credentials mapped to upstream API credentials.

Each console operator (tenant) logs in with a username/password and is bound
to one upstream webhook-delivery API (base URL + bearer token). Tenants are
read from the process environment:

Default tenant:
    CONSOLE_USERNAME, CONSOLE_PASSWORD, SVIX_API_URL, SVIX_API_TOKEN

Additional tenants (all four variables required per key):
    MULTI_<KEY>_CONSOLE_USERNAME, MULTI_<KEY>_CONSOLE_PASSWORD,
    MULTI_<KEY>_SVIX_API_URL, MULTI_<KEY>_SVIX_API_TOKEN

The registry is built once and is read-only afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import hmac
import logging
import re

from pydantic import BaseModel, ConfigDict, Field, SecretStr

logger = logging.getLogger(__name__)

_MULTI_USERNAME_RE = re.compile(r"^MULTI_(\w+)_CONSOLE_USERNAME$")


class TenantConfig(BaseModel):
    """Upstream API location and credential for one tenant.

    Resolved once per authenticated request and passed explicitly to the
    upstream client.
    """

    model_config = ConfigDict(frozen=True)

    api_url: str = Field(description="Base URL of the webhook-delivery API")
    api_token: SecretStr = Field(description="Bearer token for the webhook-delivery API")


class TenantCredentials(BaseModel):
    """Console login credentials and the tenant they unlock."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(min_length=1)
    password: SecretStr
    config: TenantConfig

    def check_password(self, candidate: str) -> bool:
        """Compare a candidate password in constant time."""
        return hmac.compare_digest(
            self.password.get_secret_value().encode("utf-8"),
            candidate.encode("utf-8"),
        )


class TenantRegistry:
    """Read-only lookup of tenants by console username."""

    def __init__(self, tenants: Mapping[str, TenantCredentials] | None = None) -> None:
        self._tenants: dict[str, TenantCredentials] = dict(tenants or {})

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> TenantRegistry:
        """Parse tenants from environment variables.

        Args:
            environ: Environment mapping (usually ``os.environ``).

        Returns:
            Registry containing every fully configured tenant.
        """
        tenants: dict[str, TenantCredentials] = {}

        username = environ.get("CONSOLE_USERNAME")
        password = environ.get("CONSOLE_PASSWORD")
        if username and password:
            tenants[username] = TenantCredentials(
                username=username,
                password=SecretStr(password),
                config=TenantConfig(
                    api_url=environ.get("SVIX_API_URL", ""),
                    api_token=SecretStr(environ.get("SVIX_API_TOKEN", "")),
                ),
            )

        keys = sorted(
            match.group(1)
            for match in (_MULTI_USERNAME_RE.match(name) for name in environ)
            if match
        )
        for key in keys:
            username = environ.get(f"MULTI_{key}_CONSOLE_USERNAME")
            password = environ.get(f"MULTI_{key}_CONSOLE_PASSWORD")
            api_url = environ.get(f"MULTI_{key}_SVIX_API_URL")
            api_token = environ.get(f"MULTI_{key}_SVIX_API_TOKEN")

            if not (username and password and api_url and api_token):
                logger.warning(
                    "Skipping incomplete tenant configuration",
                    extra={"tenant_key": key},
                )
                continue

            tenants[username] = TenantCredentials(
                username=username,
                password=SecretStr(password),
                config=TenantConfig(api_url=api_url, api_token=SecretStr(api_token)),
            )

        return cls(tenants)

    def get(self, username: str) -> TenantCredentials | None:
        """Look up a tenant by console username."""
        return self._tenants.get(username)

    def authenticate(self, username: str, password: str) -> TenantCredentials | None:
        """Return the tenant when the username/password pair matches."""
        tenant = self.get(username)
        if tenant is not None and tenant.check_password(password):
            return tenant
        return None

    @property
    def usernames(self) -> list[str]:
        """All configured console usernames."""
        return list(self._tenants)

    def __len__(self) -> int:
        return len(self._tenants)

    def __iter__(self) -> Iterator[TenantCredentials]:
        return iter(self._tenants.values())


__all__ = ["TenantConfig", "TenantCredentials", "TenantRegistry"]
