"""Domain errors."""


class DomainError(Exception):
    """Base domain error."""


class InvalidGeometryError(DomainError):
    """Too few vertices for a geometry operation."""


class ProviderUnavailableError(DomainError):
    """Live series lookup failed (transport or parse)."""


class NoMatchingSourceError(DomainError):
    """No enabled data source provides the polygon's source name."""


class ComputationFailureError(DomainError):
    """Unexpected failure while computing a polygon result."""


class InvalidDataSourceError(DomainError):
    """Data source configuration is inconsistent."""


class DataSourceLockedError(DomainError):
    """Required data source cannot be disabled."""


class UnknownDataSourceError(DomainError):
    """Data source id not present in the registry."""


class UnknownRuleError(DomainError):
    """Threshold rule id not present in the data source."""


class InvalidTimeWindowError(DomainError):
    """Time window start is after its end."""


class NoEnabledSourcesError(DomainError):
    """A shape was drawn while every data source is disabled."""
