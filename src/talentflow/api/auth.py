"""Auth API — registration, login, current account.

Learn: Routes for account authentication:
- POST /auth/register → create an account, returns a token right away
- POST /auth/login → email/password → token
- GET /auth/me → the account behind the bearer token

register and login are public in the route table; /me falls through to
the "any authenticated principal" default.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from talentflow.auth.context import SecurityContext
from talentflow.auth.dependencies import get_security_context
from talentflow.db.engine import get_db
from talentflow.schemas.auth import AccountRead, AuthPayload, LoginRequest, RegisterRequest
from talentflow.schemas.common import ApiResponse
from talentflow.services.auth_service import AuthResult, AuthService

router = APIRouter(prefix="/auth")


def _auth_svc(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


def _payload(result: AuthResult) -> AuthPayload:
    user = result.user
    return AuthPayload(
        token=result.token,
        email=user.email,
        role=user.role,
        full_name=user.full_name,
        user_id=user.id,
    )


@router.post("/register", response_model=ApiResponse[AuthPayload], status_code=201)
async def register(body: RegisterRequest, svc: AuthService = Depends(_auth_svc)):
    """Create a new account with the requested role."""
    result = await svc.register(
        email=body.email,
        full_name=body.full_name,
        password=body.password,
        role=body.role,
    )
    return ApiResponse.ok("User registered successfully", _payload(result))


@router.post("/login", response_model=ApiResponse[AuthPayload])
async def login(body: LoginRequest, svc: AuthService = Depends(_auth_svc)):
    """Login with email and password → bearer token."""
    result = await svc.login(email=body.email, password=body.password)
    return ApiResponse.ok("Login successful", _payload(result))


@router.get("/me", response_model=ApiResponse[AccountRead])
async def me(
    ctx: SecurityContext = Depends(get_security_context),
    svc: AuthService = Depends(_auth_svc),
):
    """Get the current authenticated account."""
    user = await svc.current_account(ctx)
    return ApiResponse.ok("Account retrieved successfully", AccountRead.model_validate(user))
