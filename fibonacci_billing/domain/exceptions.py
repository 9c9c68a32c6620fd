"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFibonacciSubscriptionError(DomainException):
    """Provider metadata carries no Fibonacci billing cycle"""

    pass


class InvalidMetadataError(DomainException):
    """Stored billing cycle is not an integer"""

    pass
