"""Exceptions raised by the graph widget data sources."""


class ServiceError(Exception):
    """Raised when the data source cannot produce a window of records."""

    pass


class GraphWidgetAPIError(ServiceError):
    """Raised when a request to the graph widget API fails."""

    pass


class OptionStoreError(ServiceError):
    """Raised when the option storage cannot be read or written."""

    pass
