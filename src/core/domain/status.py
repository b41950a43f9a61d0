"""Status vocabularies for CZDS zone requests.

Two separate closed sets live here on purpose: the lifecycle of a single
request (`RequestStatus`) and the current availability of a TLD for a new
request (`AvailabilityStatus`). They share words but not meaning, so they
never compare equal to each other.
"""

from __future__ import annotations

from enum import Enum


class RequestStatus(str, Enum):
    """Lifecycle of a zone request, as used by listings and filters."""

    UNSET = ""
    SUBMITTED = "Submitted"
    PENDING = "Pending"
    APPROVED = "Approved"
    DENIED = "Denied"
    REVOKED = "Revoked"
    EXPIRED = "Expired"

    @classmethod
    def _missing_(cls, value: object) -> "RequestStatus | None":
        # Detail responses use lower case for the same states.
        if isinstance(value, str):
            folded = value.strip().lower()
            for member in cls:
                if member.value.lower() == folded:
                    return member
        return None


class AvailabilityStatus(str, Enum):
    """Current eligibility of a TLD for a new request."""

    AVAILABLE = "available"
    SUBMITTED = "submitted"
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"
    EXPIRED = "expired"
    REVOKED = "revoked"  # eligibility for re-request not confirmed by the portal

    @classmethod
    def _missing_(cls, value: object) -> "AvailabilityStatus | None":
        if isinstance(value, str):
            folded = value.strip().lower()
            for member in cls:
                if member.value == folded:
                    return member
        return None

    @property
    def is_requestable(self) -> bool:
        return self in REQUESTABLE_STATUSES


REQUESTABLE_STATUSES: frozenset[AvailabilityStatus] = frozenset(
    {
        AvailabilityStatus.AVAILABLE,
        AvailabilityStatus.EXPIRED,
        AvailabilityStatus.DENIED,
        AvailabilityStatus.REVOKED,
    }
)


class SortField(str, Enum):
    TLD = "tld"
    STATUS = "status"
    LAST_UPDATED = "last_updated"
    EXPIRED = "expired"
    CREATED = "created"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"
