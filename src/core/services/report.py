"""Download of the "all requests" CSV report."""

from __future__ import annotations

import logging
from typing import BinaryIO

from core.domain.errors import EmptyReport
from core.interfaces.transport import RemoteInvoker

logger = logging.getLogger(__name__)

REPORT_PATH = "/czds/requests/report"


class ReportExporter:
    def __init__(self, invoker: RemoteInvoker) -> None:
        self._invoker = invoker

    def export_all_requests_report(self, sink: BinaryIO) -> int:
        """Copy the report body into `sink` and return the number of bytes written.

        A successful call that yields zero bytes raises `EmptyReport`: the
        portal always includes at least a header row.
        """

        written = 0
        with self._invoker.stream("GET", REPORT_PATH) as chunks:
            for chunk in chunks:
                if not chunk:
                    continue
                sink.write(chunk)
                written += len(chunk)

        url = self._invoker.url_for(REPORT_PATH)
        if written == 0:
            raise EmptyReport(f"{url} was empty", resource=url)
        logger.info("Wrote %d bytes of request report from %s", written, url)
        return written
