"""Domain errors raised by services, policies and dependencies.

Every error is an ``HTTPException`` so FastAPI can short-circuit a request
wherever one is raised; ``app.main`` installs a single handler that renders
``AppError.body()`` so each error keeps its own JSON shape.
"""
from fastapi import HTTPException, status


class AppError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str, headers: dict[str, str] | None = None):
        super().__init__(status_code=self.status_code, detail=detail, headers=headers)

    def body(self) -> dict:
        return {"message": self.detail}


class ValidationError(AppError):
    status_code = 422

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__("The given data was invalid.")
        self.errors = errors

    def body(self) -> dict:
        return {"message": self.detail, "errors": self.errors}


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, detail: str = "Unauthenticated."):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(detail)


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str = "Resource"):
        super().__init__(f"{entity} not found")


class InvalidCredentials(AppError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self):
        super().__init__("invalid_credentials")

    def body(self) -> dict:
        return {"error": self.detail}


class ServerFault(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def body(self) -> dict:
        return {"error": self.detail}


class TokenIssuanceError(ServerFault):
    def __init__(self):
        super().__init__("could_not_create_token")
