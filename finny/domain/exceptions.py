"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidExperienceError(DomainException):
    """Experience change is negative or otherwise unusable"""

    pass


class InvalidCredentialsError(DomainException):
    """Email/password pair does not match a stored account"""

    pass


class DuplicateEmailError(DomainException):
    """An account already exists for this email"""

    pass


class FinnyAPIError(DomainException):
    """Call to the Finny API failed"""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
