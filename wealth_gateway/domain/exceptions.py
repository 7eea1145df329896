"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class EntityStoreError(DomainException):
    """Entity store returned an error or is unavailable"""

    pass


class AdvisorError(DomainException):
    """Advice service failed or returned an unusable payload"""

    pass


class InvalidScenarioError(DomainException):
    """Projection inputs are outside what the projector accepts"""

    pass
