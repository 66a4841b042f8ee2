"""
File: errors.py
Purpose: Exception hierarchy shared by the DAO, storage and service layers.
"""


class PassportError(Exception):
    """
    Base error for every failure that is shown to the user.

    The message is the text displayed in the flash notification (or in the
    JSON error body), status_code is the HTTP status used by the API.
    """
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def __str__(self):
        return self.message


class ValidationError(PassportError):
    status_code = 400


class DuplicatePassportError(PassportError):
    status_code = 409


class PassportNotFoundError(PassportError):
    status_code = 404


class StorageError(PassportError):
    """Photo bucket failures (write refused, bad file, missing object)."""
    status_code = 502


class DatabaseError(PassportError):
    """Wraps mysql.connector errors raised by the DB manager."""
    status_code = 502
