"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class LoanNotFoundError(DomainException):
    """No loan with the given id in the snapshot"""

    pass


class ExpenseNotFoundError(DomainException):
    """No custom expense category with the given id in the snapshot"""

    pass


class AchievementNotFoundError(DomainException):
    """Achievement id is not part of the catalogue"""

    pass


class ChatAPIError(DomainException):
    """Chat model API returned an error or is unavailable"""

    pass
