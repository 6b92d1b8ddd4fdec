class DashboardError(Exception):
    """Base class for errors raised by the dashboard pipeline."""


class MalformedResponseError(DashboardError):
    """The backend returned something that is neither an event list nor an envelope."""
