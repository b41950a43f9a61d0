"""Submission of new zone requests."""

from __future__ import annotations

import logging

from core.domain.errors import Rejected, RemoteStatusError
from core.domain.models import RequestSubmission
from core.interfaces.transport import RemoteInvoker

logger = logging.getLogger(__name__)

CREATE_REQUEST_PATH = "/czds/requests/create"


class SubmissionService:
    """Sends a single `RequestSubmission`.

    Business rules (stale terms, duplicate requests, unknown TLDs) are the
    portal's to enforce; a 4xx answer is reported as `Rejected`.
    """

    def __init__(self, invoker: RemoteInvoker) -> None:
        self._invoker = invoker

    def submit(self, submission: RequestSubmission) -> None:
        logger.info(
            "Submitting request for %d TLD(s) (all=%s, terms %s)",
            len(submission.tld_names),
            submission.request_all_tlds,
            submission.tc_version,
        )
        try:
            self._invoker.call("POST", CREATE_REQUEST_PATH, submission.to_payload())
        except RemoteStatusError as exc:
            if not 400 <= exc.status_code < 500:
                raise
            detail = exc.response_body.strip()
            raise Rejected(
                f"Request rejected by the portal: {detail or exc.status_code}",
                status_code=exc.status_code,
                detail=detail,
            ) from exc
