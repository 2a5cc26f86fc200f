"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MissingFieldError(DomainException):
    """A required applicant profile field is absent or null"""

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Missing required field: {field_name}")


class InvalidProfileError(DomainException):
    """A profile field is present but cannot be interpreted"""

    pass


class InvalidCriteriaError(DomainException):
    """Scoring criteria overrides would break the scoring tables"""

    pass


class DecisionWebhookError(DomainException):
    """Decision notification webhook failed after all retries"""

    pass
