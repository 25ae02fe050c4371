"""Exception hierarchy for report generation."""


class ReportError(Exception):
    """Base class for all report-generation failures."""


class DataUnavailableError(ReportError):
    """The record store could not supply a required collection."""

    def __init__(self, collection: str, reason: str = ""):
        self.collection = collection
        self.reason = reason
        message = f"{collection} data unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TimesheetsUnavailableError(DataUnavailableError):
    """Timesheet feed is down. Performance reports fall back to synthetic records."""

    def __init__(self, reason: str = ""):
        super().__init__("timesheets", reason)


class UnknownReportTypeError(ReportError):
    def __init__(self, report_type: str):
        self.report_type = report_type
        super().__init__(f"Unknown report type: {report_type!r}")
