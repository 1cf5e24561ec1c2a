from sql_review.domain import MergedReport, score_label


class ConsoleReportOutput:
    """Console output adapter for reports."""

    def __init__(self, prefix: str = "[SQL REVIEW]") -> None:
        self._prefix = prefix

    @property
    def name(self) -> str:
        return "console"

    async def send(self, report: MergedReport) -> None:
        sql_preview = " ".join(report.sql.split())[:50]
        if len(" ".join(report.sql.split())) > 50:
            sql_preview += "..."

        if report.success:
            status = f"{report.overall_score}/100 {score_label(report.overall_score)}"
        else:
            status = "FAILED"
        issue_count = len(report.all_issues)
        print(f"{self._prefix} [{status}] {sql_preview} - {issue_count} issue(s)")

        for issue in report.all_issues:
            print(f"  - {issue.dimension.value} [{issue.severity.name}]: {issue.description}")
        if report.security_veto.triggered:
            print(f"  ! security veto: {report.security_veto.reason}")
