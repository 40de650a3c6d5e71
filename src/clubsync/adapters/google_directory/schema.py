"""Pydantic models describing Admin SDK Directory API payloads."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class DirectoryBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NamePayload(DirectoryBaseModel):
    given_name: str = Field(alias="givenName")
    family_name: str = Field(alias="familyName")
    full_name: str | None = Field(default=None, alias="fullName")


class EmailPayload(DirectoryBaseModel):
    address: str
    type: str | None = None
    primary: bool | None = None


class PhonePayload(DirectoryBaseModel):
    value: str
    type: str | None = None


class MembershipSchemaPayload(DirectoryBaseModel):
    expires: date
    join_date: date = Field(alias="Join_Date")
    membership_type: str = Field(default="Individual", alias="membershipType")
    family: str | None = None

    _normalize_family = field_validator("family", mode="before")(_blank_to_none)

    @field_serializer("expires", "join_date")
    def _serialize_date(self, value: date) -> str:
        return value.isoformat()


class UserPayload(DirectoryBaseModel):
    primary_email: str = Field(alias="primaryEmail")
    name: NamePayload
    emails: list[EmailPayload] = Field(default_factory=list[EmailPayload])
    phones: list[PhonePayload] = Field(default_factory=list[PhonePayload])
    org_unit_path: str = Field(default="/", alias="orgUnitPath")
    recovery_email: str | None = Field(default=None, alias="recoveryEmail")
    recovery_phone: str | None = Field(default=None, alias="recoveryPhone")
    include_in_global_address_list: bool | None = Field(
        default=None, alias="includeInGlobalAddressList"
    )
    custom_schemas: dict[str, MembershipSchemaPayload] = Field(
        default_factory=dict[str, MembershipSchemaPayload], alias="customSchemas"
    )
    password: str | None = None
    change_password_at_next_login: bool | None = Field(
        default=None, alias="changePasswordAtNextLogin"
    )

    def to_request(self) -> dict[str, object]:
        return self.model_dump(by_alias=True, exclude_none=True)


class UserListResponse(DirectoryBaseModel):
    users: list[UserPayload] = Field(default_factory=list[UserPayload])
    next_page_token: str | None = Field(default=None, alias="nextPageToken")


class MemberPayload(DirectoryBaseModel):
    email: str
    role: str = "MEMBER"


class ErrorDetail(DirectoryBaseModel):
    message: str = ""
    reason: str | None = None
    domain: str | None = None


class ErrorBody(DirectoryBaseModel):
    code: int
    message: str = ""
    errors: list[ErrorDetail] = Field(default_factory=list[ErrorDetail])


class ErrorResponse(DirectoryBaseModel):
    error: ErrorBody
