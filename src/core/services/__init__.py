"""Core services built on top of a `RemoteInvoker`."""

from __future__ import annotations

from dataclasses import dataclass

from core.interfaces.transport import RemoteInvoker
from core.services.catalog import CatalogReader
from core.services.orchestrator import RequestOrchestrator, select_requestable
from core.services.report import ReportExporter
from core.services.submission import SubmissionService


@dataclass(frozen=True)
class CZDSServices:
    """Every service wired to the same invoker."""

    catalog: CatalogReader
    submissions: SubmissionService
    orchestrator: RequestOrchestrator
    reports: ReportExporter

    @classmethod
    def from_invoker(cls, invoker: RemoteInvoker) -> "CZDSServices":
        catalog = CatalogReader(invoker)
        submissions = SubmissionService(invoker)
        return cls(
            catalog=catalog,
            submissions=submissions,
            orchestrator=RequestOrchestrator(catalog, submissions),
            reports=ReportExporter(invoker),
        )


__all__ = [
    "CZDSServices",
    "CatalogReader",
    "ReportExporter",
    "RequestOrchestrator",
    "SubmissionService",
    "select_requestable",
]
