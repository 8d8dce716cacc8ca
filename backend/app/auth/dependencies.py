"""
FastAPI dependencies for authentication, request bodies and shared resources.

Everything is read from ``request.app.state``, populated by ``create_app``.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from fastapi import Header, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from devconnect.services import GitHubService

from .jwt import Principal

TOKEN_HEADER = "x-auth-token"

ModelT = TypeVar("ModelT", bound=BaseModel)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield a session that commits on success and rolls back on error."""
    async with request.app.state.db.session() as session:
        yield session


def get_github_service(request: Request) -> GitHubService:
    return request.app.state.github


def get_current_principal(
    request: Request,
    token: str | None = Header(default=None, alias=TOKEN_HEADER),
) -> Principal:
    """
    Resolve the caller from the ``x-auth-token`` header.

    Raises Unauthenticated/InvalidCredential, which the exception handlers
    turn into 401 responses before the route body runs.
    """
    return request.app.state.token_verifier.verify(token)


def json_body(model: type[ModelT]) -> Callable[[Request], Awaitable[ModelT]]:
    """
    Build a dependency that validates the JSON body against ``model``.

    A missing, unreadable or non-object body is validated as ``{}`` so every
    required field is reported. Declare it after ``get_current_principal``
    so the token is checked first.
    """

    async def _parse(request: Request) -> ModelT:
        try:
            data = await request.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        try:
            return model.model_validate(data)
        except ValidationError as exc:
            errors = [{**error, "loc": ("body", *error["loc"])} for error in exc.errors()]
            raise RequestValidationError(errors, body=data) from exc

    return _parse
