from fastapi import APIRouter

from app.core.auth import fastapi_users, auth_backend, UserRead, UserCreate
from app.api.v1.routes import auth, goals, rewards, savings, transactions, wallet

api_router = APIRouter()

# ------------------------------------------------------------
# AUTHENTICATION ROUTES
# ------------------------------------------------------------
# Custom auth routes first so /auth/jwt/logout resolves here
api_router.include_router(auth.router, prefix="/auth")
api_router.include_router(
    fastapi_users.get_auth_router(auth_backend),
    prefix="/auth/jwt",
    tags=["Authentication"],
)
api_router.include_router(
    fastapi_users.get_register_router(UserRead, UserCreate),
    prefix="/auth",
    tags=["Authentication"],
)

# ------------------------------------------------------------
# LEDGER ROUTES
# ------------------------------------------------------------
api_router.include_router(savings.router)
api_router.include_router(wallet.router)
api_router.include_router(goals.router)
api_router.include_router(transactions.router)
api_router.include_router(rewards.router)
