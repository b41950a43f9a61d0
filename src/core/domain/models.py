"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  services to any I/O library.
- Aliases map the portal's JSON keys (typos included) onto readable names.

Note:
- These models describe *what* the portal returns or accepts, not *how* it
  is fetched.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator
from pydantic.config import ConfigDict

from core.domain.status import AvailabilityStatus, RequestStatus, SortDirection, SortField

# The portal marks "no expiration set" with the zero instant, not with null.
NO_EXPIRATION = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _is_no_expiration(value: datetime) -> bool:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value == NO_EXPIRATION


def _request_status(value: Any) -> Any:
    return RequestStatus(value) if isinstance(value, str) else value


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class Pagination(_WireModel):
    size: int = Field(
        default=0,
        ge=0,
        description="Page size; 0 lets the portal choose.",
    )
    page: int = Field(
        default=0,
        ge=0,
        description="Zero-based page index.",
    )


class Sort(_WireModel):
    field: SortField | None = Field(
        default=None,
        description="Column to sort by; unset lets the portal choose.",
    )
    direction: SortDirection | None = Field(
        default=None,
        description="Sort direction; unset lets the portal choose.",
    )

    @field_serializer("field", "direction")
    def _serialize_optional(self, value: SortField | SortDirection | None) -> str:
        return value.value if value is not None else ""


class FilterQuery(_WireModel):
    """Filter, page and sort for a request listing.

    Every field is optional. The all-default query asks for every status,
    the portal's default page and the portal's default order.
    """

    status: RequestStatus = Field(
        default=RequestStatus.UNSET,
        description="Lifecycle filter; UNSET means all statuses.",
    )
    text_filter: str = Field(
        default="",
        alias="filter",
        description="Substring match on the zone name.",
    )
    pagination: Pagination = Field(default_factory=Pagination)
    sort: Sort = Field(default_factory=Sort)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class TLDAvailability(_WireModel):
    tld: str = Field(..., description="TLD in A-label form.")
    u_label: str = Field(
        default="",
        alias="ulable",
        description="UTF-8 decoded punycode label.",
    )
    current_status: AvailabilityStatus = Field(..., alias="currentStatus")
    sftp_enabled: bool = Field(default=False, alias="sftp")

    @field_validator("current_status", mode="before")
    @classmethod
    def _fold_status(cls, value: Any) -> Any:
        return AvailabilityStatus(value) if isinstance(value, str) else value


class RequestSummary(_WireModel):
    """One row of the request listing."""

    request_id: str = Field(..., alias="requestId")
    tld: str
    u_label: str = Field(default="", alias="ulable")
    status: RequestStatus
    created: datetime
    last_updated: datetime
    expired: datetime = Field(
        default=NO_EXPIRATION,
        description="Expiration; the zero instant means no expiration set.",
    )
    sftp_enabled: bool = Field(default=False, alias="sftp")

    @field_validator("status", mode="before")
    @classmethod
    def _fold_status(cls, value: Any) -> Any:
        return _request_status(value)

    @property
    def expires(self) -> datetime | None:
        return None if _is_no_expiration(self.expired) else self.expired


class RequestList(_WireModel):
    items: list[RequestSummary] = Field(default_factory=list, alias="requests")
    total_matching: int = Field(
        default=0,
        ge=0,
        alias="totalRequests",
        description="Matches across all pages; authoritative over len(items).",
    )

    @field_validator("items", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class HistoryEntry(_WireModel):
    timestamp: datetime
    action: str = Field(..., description="Lifecycle event label, e.g. 'approved'.")


class FtpDetails(_WireModel):
    private_data_error: bool = Field(default=False, alias="privateDataError")


class RequestDetail(_WireModel):
    """Full detail and history of a single zone request."""

    request_id: str = Field(..., alias="requestId")
    tld_ref: TLDAvailability | None = Field(default=None, alias="tld")
    ftp_ips: list[str] = Field(default_factory=list, alias="ftpips")
    status: RequestStatus
    tc_version: str = Field(default="", alias="tcVersion")
    created: datetime
    requesting_ip: str = Field(default="", alias="requestIp")
    reason: str = ""
    last_updated: datetime
    expired: datetime = NO_EXPIRATION
    history: list[HistoryEntry] = Field(default_factory=list)
    ftp_details: FtpDetails | None = Field(default=None, alias="ftpDetails")
    private_data_error: bool = Field(default=False, alias="privateDataError")

    @field_validator("ftp_ips", "history", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def _fold_status(cls, value: Any) -> Any:
        return _request_status(value)

    @property
    def expires(self) -> datetime | None:
        return None if _is_no_expiration(self.expired) else self.expired

    @property
    def ftp_private_data_error(self) -> bool | None:
        """`None` when the portal sent no FTP details block."""

        return None if self.ftp_details is None else self.ftp_details.private_data_error


class TermsAndConditions(_WireModel):
    version: str = Field(..., description="Opaque token echoed back on submission.")
    content: str = ""
    content_url: str = Field(default="", alias="contentUrl")
    created: datetime


class RequestSubmission(_WireModel):
    """Outbound body of a new zone request."""

    request_all_tlds: bool = Field(default=False, alias="allTlds")
    tld_names: list[str] = Field(..., min_length=1, alias="tldNames")
    reason: str = Field(..., min_length=1)
    tc_version: str = Field(
        ...,
        min_length=1,
        alias="tcVersion",
        description="Version of the terms fetched just before submitting.",
    )
    additional_ftp_ips: list[str] = Field(default_factory=list, alias="additionalFtfIps")

    @field_validator("tld_names")
    @classmethod
    def _unique_names(cls, value: list[str]) -> list[str]:
        if any(not name for name in value):
            raise ValueError("TLD names must not be empty")
        if len(set(value)) != len(value):
            raise ValueError("TLD names must be unique")
        return value

    @field_validator("reason")
    @classmethod
    def _reason_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("reason must not be blank")
        return value

    def to_payload(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json", by_alias=True)
        if not self.additional_ftp_ips:
            payload.pop("additionalFtfIps")
        return payload
