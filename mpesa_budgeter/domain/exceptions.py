"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class UnrecognizedMessageError(DomainException):
    """Text does not start with a '<code> Confirmed' anchor"""

    pass


class InvalidTransactionDataError(DomainException):
    """Caller-supplied transaction payload cannot become a record"""

    pass
