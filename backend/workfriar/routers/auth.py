"""
Authentication router: login, current user, logout.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from workfriar.database import get_db
from workfriar.dependencies import get_current_user
from workfriar.models.user import User
from workfriar.schemas.common import ApiResponse, envelope
from workfriar.schemas.user import LoginData, LoginRequest, UserOut, user_out
from workfriar.services.auth import JWT_EXPIRY_HOURS, create_access_token, verify_password

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=ApiResponse[LoginData])
def login(body: LoginRequest, response: Response, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == body.email.strip().lower()).first()
    if not user or not verify_password(body.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account disabled")

    token = create_access_token({"sub": str(user.id), "email": user.email})
    response.set_cookie(
        "token",
        f"Bearer {token}",
        httponly=True,
        samesite="lax",
        max_age=JWT_EXPIRY_HOURS * 3600,
    )
    return envelope(LoginData(access_token=token, user=user_out(user)), "Login successful")


@router.get("/me", response_model=ApiResponse[UserOut])
def me(user: User = Depends(get_current_user)):
    return envelope(user_out(user), "User fetched successfully")


@router.post("/logout", response_model=ApiResponse[list])
def logout(response: Response):
    response.delete_cookie("token")
    return envelope([], "Logged out")
