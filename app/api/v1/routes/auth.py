# app/api/v1/routes/auth.py
from fastapi import APIRouter, Depends, Response, status

from app.core.auth import User, UserRead
from app.api.deps import get_current_user

router = APIRouter(tags=["Authentication"])

# Login and registration come from fastapi-users; these sit beside them
@router.post("/jwt/logout", status_code=status.HTTP_200_OK)
async def logout(response: Response):
    """
    Logout endpoint that doesn't require authentication.
    Clears the access_token cookie if the client used one.
    """
    response.delete_cookie(key="access_token")
    return {"detail": "Successfully logged out"}

@router.get("/me", response_model=UserRead)
async def read_own_profile(user: User = Depends(get_current_user)):
    """Profile of the authenticated caller"""
    return user
