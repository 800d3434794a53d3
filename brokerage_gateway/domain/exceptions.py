"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidNumericInputError(DomainException, ValueError):
    """Input value cannot be converted to an exact decimal number"""

    pass
