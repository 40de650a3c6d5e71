"""Retry ceilings and polling defaults for reconciliation runs."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, env_int_list

DEFAULT_MAX_GENERATION_ATTEMPTS = 100
DEFAULT_CREATION_PENDING_MAX_ATTEMPTS = 20
DEFAULT_CREATION_PENDING_BACKOFF_SECONDS = 0.25
DEFAULT_VISIBILITY_POLL_ATTEMPTS = 40
DEFAULT_VISIBILITY_POLL_INTERVAL_SECONDS = 0.25
DEFAULT_EXPIRY_WARNING_DAYS = (30, 7, 1)


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    max_generation_attempts: int = DEFAULT_MAX_GENERATION_ATTEMPTS
    creation_pending_max_attempts: int = DEFAULT_CREATION_PENDING_MAX_ATTEMPTS
    creation_pending_backoff_seconds: float = DEFAULT_CREATION_PENDING_BACKOFF_SECONDS
    visibility_poll_attempts: int = DEFAULT_VISIBILITY_POLL_ATTEMPTS
    visibility_poll_interval_seconds: float = DEFAULT_VISIBILITY_POLL_INTERVAL_SECONDS


@dataclass(frozen=True, slots=True)
class ExpirationConfig:
    warning_days: tuple[int, ...] = DEFAULT_EXPIRY_WARNING_DAYS


def get_reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(
        max_generation_attempts=env_int(
            "CLUBSYNC_MAX_GENERATION_ATTEMPTS", DEFAULT_MAX_GENERATION_ATTEMPTS
        ),
        creation_pending_max_attempts=env_int(
            "CLUBSYNC_CREATION_PENDING_MAX_ATTEMPTS", DEFAULT_CREATION_PENDING_MAX_ATTEMPTS
        ),
        creation_pending_backoff_seconds=env_float(
            "CLUBSYNC_CREATION_PENDING_BACKOFF_SECONDS", DEFAULT_CREATION_PENDING_BACKOFF_SECONDS
        ),
        visibility_poll_attempts=env_int(
            "CLUBSYNC_VISIBILITY_POLL_ATTEMPTS", DEFAULT_VISIBILITY_POLL_ATTEMPTS
        ),
        visibility_poll_interval_seconds=env_float(
            "CLUBSYNC_VISIBILITY_POLL_INTERVAL_SECONDS", DEFAULT_VISIBILITY_POLL_INTERVAL_SECONDS
        ),
    )


def get_expiration_config() -> ExpirationConfig:
    return ExpirationConfig(
        warning_days=env_int_list("CLUBSYNC_EXPIRY_WARNING_DAYS", DEFAULT_EXPIRY_WARNING_DAYS)
    )
