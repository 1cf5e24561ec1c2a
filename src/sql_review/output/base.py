from typing import Protocol, runtime_checkable

from sql_review.domain import MergedReport


@runtime_checkable
class ReportOutput(Protocol):
    """Protocol for report output destinations."""

    @property
    def name(self) -> str:
        ...

    async def send(self, report: MergedReport) -> None:
        ...
