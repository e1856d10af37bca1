from .base import CineBookError


class InvalidInputError(CineBookError):
    status_code = 400
    code = "INVALID_INPUT"

    def __init__(self, message: str = "Invalid input", code: str = None):
        super().__init__(message, code=code)
