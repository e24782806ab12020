from fastapi import HTTPException, status


class ApplicationException(HTTPException):
    """Domain failure carrying an HTTP status and a message."""

    def __init__(self, status_code: int, message: str, headers: dict | None = None):
        super().__init__(status_code=status_code, detail=message, headers=headers)

    @property
    def message(self) -> str:
        return self.detail


class NotFoundException(ApplicationException):
    def __init__(self, message: str):
        super().__init__(status.HTTP_404_NOT_FOUND, message)


class BadRequestException(ApplicationException):
    def __init__(self, message: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, message)


class ForbiddenException(ApplicationException):
    def __init__(self, message: str = "Access denied."):
        super().__init__(status.HTTP_403_FORBIDDEN, message)


class CurrencySourceException(ApplicationException):
    def __init__(self, message: str):
        super().__init__(status.HTTP_502_BAD_GATEWAY, message)


class UserAlreadyExistsException(BadRequestException):
    def __init__(self, field: str):
        super().__init__(f"User with this {field} already exists.")


class InvalidCredentialsException(ApplicationException):
    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class TokenInvalidException(ApplicationException):
    def __init__(self):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            "Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
