"""Zone request workflows.

This module composes the catalog reader and the submission service into
the two flows the CLI exposes: requesting named TLDs and requesting every
TLD the portal currently lets us request. Both flows fetch the terms right
before submitting so the accepted version is the one the portal requires
at that moment. Neither flow is transactional: fetching terms has no side
effect, so a failed run can simply be repeated.
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from core.domain.errors import BulkRequestError, CZDSError
from core.domain.models import RequestSubmission, TLDAvailability
from core.domain.status import AvailabilityStatus
from core.services.catalog import CatalogReader
from core.services.submission import SubmissionService

logger = logging.getLogger(__name__)


def select_requestable(tlds: Iterable[TLDAvailability]) -> list[str]:
    """Names of TLDs a new request makes sense for, in the portal's order."""

    return [tld.tld for tld in tlds if tld.current_status.is_requestable]


class RequestOrchestrator:
    def __init__(self, catalog: CatalogReader, submissions: SubmissionService) -> None:
        self._catalog = catalog
        self._submissions = submissions

    def request_specific_tlds(self, tlds: Sequence[str], reason: str) -> None:
        """Request access to `tlds`, accepting the current terms.

        The TLDs should be requestable according to `list_tld_availability`;
        the portal rejects the rest.
        """

        terms = self._catalog.get_current_terms()
        submission = RequestSubmission(
            tld_names=list(tlds),
            reason=reason,
            tc_version=terms.version,
        )
        self._submissions.submit(submission)

    def request_all_eligible_tlds(self, reason: str) -> list[str]:
        """Request every eligible TLD and return the names that were requested.

        Returns an empty list without fetching terms or submitting when
        nothing is eligible. A failed terms fetch propagates unchanged. If the
        submission fails, `BulkRequestError` carries the attempted names and
        the original error.
        """

        availability = self._catalog.list_tld_availability()
        requested = select_requestable(availability)
        if not requested:
            logger.info("No TLDs are currently eligible for a new request")
            return requested

        revoked = [
            tld.tld for tld in availability if tld.current_status is AvailabilityStatus.REVOKED
        ]
        if revoked:
            logger.warning(
                "Including revoked TLD(s) %s; re-request eligibility is unconfirmed",
                ", ".join(revoked),
            )

        terms = self._catalog.get_current_terms()
        submission = RequestSubmission(
            request_all_tlds=True,
            tld_names=requested,
            reason=reason,
            tc_version=terms.version,
        )
        try:
            self._submissions.submit(submission)
        except CZDSError as exc:
            raise BulkRequestError(
                f"Requesting {len(requested)} eligible TLD(s) failed: {exc}",
                tlds=tuple(requested),
                cause=exc,
            ) from exc

        logger.info("Requested %d eligible TLD(s)", len(requested))
        return requested
