"""
Custom exceptions for the Drug Information API.
Provides specific error types for different failure scenarios.
"""


class DrugInfoException(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationException(DrugInfoException):
    """Raised when request or record data validation fails."""
    pass


class DuplicateDrugCodeException(ValidationException):
    """Raised when a drug code already exists in the store."""
    def __init__(self, message: str = "Drug code already exists"):
        super().__init__(message)


class DrugNotFoundException(DrugInfoException):
    """Raised when a drug is not found in the store."""
    def __init__(self, message: str = "Drug not found"):
        super().__init__(message)


class StoreException(DrugInfoException):
    """Raised when a record store operation fails. Carries internal detail."""
    pass


class ServiceException(DrugInfoException):
    """Raised by services when an operation fails. Carries a public message only."""
    pass


class FileProcessingException(DrugInfoException):
    """Raised when a drug data file cannot be read or parsed."""
    pass
