from fastapi import APIRouter

from rollbook.web.deps import AppDep, AuthTokenDep
from rollbook.web.openapi import ErrorResponse, MessageResponse

router = APIRouter(tags=["auth"])


@router.get(
    "/protected",
    summary="Protected example",
    description="Return a greeting for the authenticated user. Useful to check that a token is still valid.",
    operation_id="getProtectedMessage",
    responses={
        200: {"description": "Greeting for the current user"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_protected_message(app: AppDep, auth_token: AuthTokenDep) -> MessageResponse:
    return MessageResponse(message=await app.get_protected_message(auth_token))
