from typing import Annotated, cast

from fastapi import Depends, Header, Request

from rollbook.app import App
from rollbook.core.modules.token.models import AuthToken


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_token(
    request: Request,
    app: Annotated[App, Depends(get_app)],
    authorization: Annotated[str | None, Header(include_in_schema=False)] = None,
) -> AuthToken:
    """Get and validate the bearer token from the Authorization header.

    The raw header is read instead of going through HTTPBearer because the scheme
    must match "Bearer" exactly and case-sensitively, which AccessService enforces.

    Verified claims are attached to `request.state.claims`.
    """
    auth_token = app.extract_bearer_token(authorization)
    request.state.claims = app.authenticate(auth_token)
    return auth_token


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]
