# artvista/domain/errors.py
"""
Bledy domenowe. Kazdy niesie status HTTP, na ktory router go tlumaczy.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class BadRequest(AppError):
    status_code = 400


class Unauthorized(AppError):
    status_code = 401


class InvalidCredentials(Unauthorized):
    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class Forbidden(AppError):
    status_code = 403


class NotFound(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409
