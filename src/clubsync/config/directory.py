"""Directory configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import env_list, optional_env_var, require_env_var, require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

ADMIN_DIRECTORY_BASE_URL = "https://admin.googleapis.com/admin/directory/v1/"
ADMIN_DIRECTORY_TIMEOUT_SECONDS = 30.0

DEFAULT_PHONE_PREFIX = "+1"
DEFAULT_SCHEMA_NAME = "Club_Membership"
DEFAULT_CUSTOMER = "my_customer"


@dataclass(frozen=True, slots=True)
class DirectoryConfig:
    """Where new accounts live and how their identifiers are derived."""

    domain: str
    org_unit_path: str
    groups: tuple[str, ...] = ()
    phone_prefix: str = DEFAULT_PHONE_PREFIX
    schema_name: str = DEFAULT_SCHEMA_NAME
    customer: str = DEFAULT_CUSTOMER

    def __post_init__(self) -> None:
        object.__setattr__(self, "domain", self.domain.strip())
        object.__setattr__(self, "org_unit_path", self.org_unit_path.strip())


@dataclass(frozen=True, slots=True)
class GoogleDirectoryConfig:
    access_token: str
    resilience: ResilienceConfig = field(
        default_factory=lambda: ResilienceConfig(
            name="admin-directory",
            base_url=ADMIN_DIRECTORY_BASE_URL,
            timeout_seconds=ADMIN_DIRECTORY_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=4),
        )
    )


def get_directory_config() -> DirectoryConfig:
    values = require_env_vars(("CLUBSYNC_DOMAIN", "CLUBSYNC_ORG_UNIT_PATH"))
    return DirectoryConfig(
        domain=values["CLUBSYNC_DOMAIN"],
        org_unit_path=values["CLUBSYNC_ORG_UNIT_PATH"],
        groups=env_list("CLUBSYNC_GROUPS"),
        phone_prefix=optional_env_var("CLUBSYNC_PHONE_PREFIX", DEFAULT_PHONE_PREFIX),
        schema_name=optional_env_var("CLUBSYNC_SCHEMA_NAME", DEFAULT_SCHEMA_NAME),
        customer=optional_env_var("CLUBSYNC_CUSTOMER", DEFAULT_CUSTOMER),
    )


def get_google_directory_config(
    *,
    resilience: ResilienceConfig | None = None,
) -> GoogleDirectoryConfig:
    token = require_env_var("GOOGLE_ADMIN_ACCESS_TOKEN")
    if resilience is None:
        return GoogleDirectoryConfig(access_token=token)
    return GoogleDirectoryConfig(access_token=token, resilience=resilience)
