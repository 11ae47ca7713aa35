"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ConfigurationError(DomainException):
    """Bracket table or tax configuration is malformed"""

    pass


class ValidationError(DomainException):
    """Caller supplied input the engine refuses to compute on"""

    pass


class InvalidIncomeKind(ValidationError):
    """Income record is neither salaried nor self-employed"""

    pass


class InvalidRate(ValidationError):
    """Rate or percentage outside its allowed range"""

    pass


class InvalidTargetMonths(ValidationError):
    """Emergency fund target months outside 3..24"""

    pass


class InvalidAmount(ValidationError):
    """Negative or otherwise unusable monetary amount"""

    pass


class SplitSumMismatch(ValidationError):
    """Split percentages do not add up to 100"""

    pass


class DuplicateParticipant(ValidationError):
    """Same participant appears twice in one split"""

    pass


class EmptySplit(ValidationError):
    """Split has no participants"""

    pass
