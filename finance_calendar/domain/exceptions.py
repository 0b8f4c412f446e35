"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class RecordNotFoundError(DomainException):
    """Requested document does not exist for this user"""

    pass


class InvalidCollectionError(DomainException):
    """Collection name is not one of the stored record types"""

    pass


class InvalidInstallmentPlanError(DomainException):
    """Installment plan input is missing or not positive"""

    pass
