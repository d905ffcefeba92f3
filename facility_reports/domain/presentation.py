"""Display renderings attached to reports for the UI"""
from facility_reports.domain import dates
from facility_reports.domain.models.report import Report, ReportRead


def present_report(report: Report) -> ReportRead:
    return ReportRead(
        **report.model_dump(),
        created_display=dates.to_display(report.created_at),
        deadline_display=dates.to_display(report.deadline_at),
        deadline_input=dates.to_input_form(report.deadline_at),
        completed_display=dates.to_display(report.completed_at),
    )
