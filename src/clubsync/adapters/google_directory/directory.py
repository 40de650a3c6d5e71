"""Directory port backed by the Admin SDK Directory API."""

from __future__ import annotations

import secrets
import time
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from clubsync.domain.errors import DirectoryError, DirectoryErrorKind
from clubsync.domain.retry import retry_on_specific_error, wait_until_or_timeout

from .client import AdminDirectoryAPIError
from .translator import build_user_payload, parse_user

if TYPE_CHECKING:
    from clubsync.config import DirectoryConfig, ReconcileConfig
    from clubsync.domain.model import AccountRecord
    from clubsync.domain.retry import Sleep

    from .client import AdminDirectoryClient

log = getLogger(__name__)

ALREADY_EXISTS_MESSAGE = "Entity already exists."
NOT_FOUND_MESSAGE = "Resource Not Found: userKey"
CREATION_PENDING_MESSAGE = "User creation is not complete."
INVALID_SCOPE_MARKER = "INVALID_OU_ID"
MEMBER_EXISTS_MESSAGE = "Member already exists."
PASSWORD_BYTES = 12


def classify_error(exc: AdminDirectoryAPIError, identifier: str | None = None) -> DirectoryError:
    """Map an API error onto the directory error taxonomy."""

    message = exc.message
    if message == ALREADY_EXISTS_MESSAGE:
        kind = DirectoryErrorKind.ALREADY_EXISTS
    elif message.startswith(NOT_FOUND_MESSAGE) or exc.status_code == httpx.codes.NOT_FOUND:
        kind = DirectoryErrorKind.NOT_FOUND
        if identifier is not None:
            message = f"Resource Not Found: {identifier}"
    elif message == CREATION_PENDING_MESSAGE:
        kind = DirectoryErrorKind.CREATION_PENDING
    elif INVALID_SCOPE_MARKER in message:
        kind = DirectoryErrorKind.SCOPE_INVALID
    else:
        kind = DirectoryErrorKind.UNCLASSIFIED
    return DirectoryError(kind, message, identifier)


class GoogleDirectory:
    def __init__(
        self,
        client: AdminDirectoryClient,
        config: DirectoryConfig,
        reconcile: ReconcileConfig,
        *,
        sleep: Sleep = time.sleep,
    ) -> None:
        self.client = client
        self.config = config
        self.reconcile = reconcile
        self._sleep = sleep

    def list_all(self) -> list[AccountRecord]:
        query = f"orgUnitPath='{self.config.org_unit_path}'"
        records: list[AccountRecord] = []
        page_token: str | None = None
        while True:
            try:
                page = self.client.list_users(query=query, page_token=page_token)
            except AdminDirectoryAPIError as exc:
                error = classify_error(exc)
                if error.kind is DirectoryErrorKind.SCOPE_INVALID:
                    raise error.annotate(f'"{self.config.org_unit_path}"') from exc
                raise error from exc
            except httpx.HTTPError as exc:
                raise _transport_error(exc) from exc

            for user in page.users:
                try:
                    records.append(parse_user(user, config=self.config))
                except ValueError as exc:
                    log.warning("Skipping unmanaged user %s: %s", user.primary_email, exc)
            page_token = page.next_page_token
            if not page_token:
                break
        log.info("Listed %d records in %s", len(records), self.config.org_unit_path)
        return records

    def create(self, record: AccountRecord) -> AccountRecord:
        identifier = record.primary_identifier
        payload = build_user_payload(record, config=self.config)
        payload.password = secrets.token_urlsafe(PASSWORD_BYTES)
        payload.change_password_at_next_login = True
        try:
            created = self.client.insert_user(payload)
        except AdminDirectoryAPIError as exc:
            error = classify_error(exc, identifier)
            if error.kind is DirectoryErrorKind.SCOPE_INVALID:
                raise error.annotate('"orgUnitPath"') from exc
            if error.kind is not DirectoryErrorKind.ALREADY_EXISTS:
                raise DirectoryError(
                    error.kind, f"Creating {identifier} failed: {error.message}", identifier
                ) from exc
            raise error from exc
        except httpx.HTTPError as exc:
            raise _transport_error(exc, identifier) from exc

        self._await_visibility(identifier, present=True)
        return parse_user(created, config=self.config)

    def update(self, record: AccountRecord) -> AccountRecord:
        identifier = record.primary_identifier
        payload = build_user_payload(record, config=self.config)
        try:
            updated = self.client.update_user(identifier, payload)
        except AdminDirectoryAPIError as exc:
            raise classify_error(exc, identifier) from exc
        except httpx.HTTPError as exc:
            raise _transport_error(exc, identifier) from exc
        return parse_user(updated, config=self.config)

    def remove(self, record: AccountRecord) -> None:
        identifier = record.primary_identifier
        try:
            self.client.delete_user(identifier)
        except AdminDirectoryAPIError as exc:
            error = classify_error(exc, identifier)
            if error.kind is DirectoryErrorKind.NOT_FOUND:
                log.info("%s already absent", identifier)
                return
            raise error from exc
        except httpx.HTTPError as exc:
            raise _transport_error(exc, identifier) from exc
        self._await_visibility(identifier, present=False)

    def get(self, identifier: str) -> AccountRecord:
        try:
            user = self.client.get_user(identifier)
        except AdminDirectoryAPIError as exc:
            raise classify_error(exc, identifier) from exc
        except httpx.HTTPError as exc:
            raise _transport_error(exc, identifier) from exc
        return parse_user(user, config=self.config)

    def add_to_group(self, record: AccountRecord, group: str) -> None:
        def insert() -> None:
            try:
                self.client.insert_group_member(group, record.home_address)
            except AdminDirectoryAPIError as exc:
                if exc.message == MEMBER_EXISTS_MESSAGE:
                    log.info("%s is already in %s", record.home_address, group)
                    return
                raise classify_error(exc, record.primary_identifier) from exc
            except httpx.HTTPError as exc:
                raise _transport_error(exc, record.primary_identifier) from exc

        # a freshly created user may not be usable as a group member yet
        retry_on_specific_error(
            insert,
            DirectoryErrorKind.CREATION_PENDING,
            backoff_seconds=self.reconcile.creation_pending_backoff_seconds,
            max_attempts=self.reconcile.creation_pending_max_attempts,
            sleep=self._sleep,
        )

    def remove_from_group(self, record: AccountRecord, group: str) -> None:
        try:
            self.client.delete_group_member(group, record.home_address)
        except AdminDirectoryAPIError as exc:
            error = classify_error(exc, record.primary_identifier)
            if error.kind is DirectoryErrorKind.NOT_FOUND:
                log.info("%s is not in %s", record.home_address, group)
                return
            raise error from exc
        except httpx.HTTPError as exc:
            raise _transport_error(exc, record.primary_identifier) from exc
        log.info("Removed %s from %s", record.home_address, group)

    def _await_visibility(self, identifier: str, *, present: bool) -> None:
        def visible() -> bool:
            try:
                self.client.get_user(identifier)
            except AdminDirectoryAPIError as exc:
                if exc.status_code == httpx.codes.NOT_FOUND:
                    return not present
                raise classify_error(exc, identifier) from exc
            except httpx.HTTPError as exc:
                raise _transport_error(exc, identifier) from exc
            return present

        settled = wait_until_or_timeout(
            self.reconcile.visibility_poll_attempts,
            visible,
            interval_seconds=self.reconcile.visibility_poll_interval_seconds,
            sleep=self._sleep,
        )
        if not settled:
            log.warning(
                "%s not yet %s after polling; continuing",
                identifier,
                "visible" if present else "gone",
            )


def _transport_error(exc: httpx.HTTPError, identifier: str | None = None) -> DirectoryError:
    return DirectoryError(DirectoryErrorKind.UNCLASSIFIED, f"Transport failure: {exc}", identifier)


if TYPE_CHECKING:
    from clubsync.domain.ports import Directory

    def _directory_check(directory: GoogleDirectory) -> Directory:
        return directory
