class DashboardError(Exception):
    """Base class for dashboard ingestion and lookup errors."""


class SourceUnavailable(DashboardError):
    """A data source (week file, goals table) could not be loaded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"{source}: {reason}")


class MalformedGoalRow(DashboardError):
    """A goal table row is too short or has no athlete id."""

    def __init__(self, line_no: int, reason: str):
        self.line_no = line_no
        self.reason = reason
        super().__init__(f"goal row {line_no}: {reason}")


class WeekNotFound(DashboardError, LookupError):
    """The requested week ordinal is not among the loaded weeks."""

    def __init__(self, ordinal: int):
        self.ordinal = ordinal
        super().__init__(f"week {ordinal} is not loaded")
