from typing import Annotated

from fastapi import APIRouter, Body
from pydantic import BaseModel, Field

from rollbook.web.deps import AppDep
from rollbook.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    """Authentication request.

    Both fields are optional in the schema so that a missing value is reported
    as "Missing credentials" rather than a schema error.
    """

    username: str | None = Field(None, description="Username for authentication")
    password: str | None = Field(None, description="Password for authentication")


class LoginResponse(BaseModel):
    """Authentication response."""

    token: str = Field(..., description="Bearer token for subsequent requests, valid for one hour")


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with username and password to receive a session token.",
    operation_id="login",
    responses={
        200: {"description": "Successfully authenticated"},
        400: {"model": ErrorResponse, "description": "Missing credentials"},
        401: {"model": ErrorResponse, "description": "Invalid username or password"},
    },
)
async def login(app: AppDep, login_data: Annotated[LoginRequest | None, Body()] = None) -> LoginResponse:
    login_data = login_data or LoginRequest()
    token = await app.login(login_data.username, login_data.password)
    return LoginResponse(token=token)
