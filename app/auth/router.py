from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session
from datetime import timedelta
from app.core.database import get_db
from app.core.config import settings
from app.core.logger import audit_log
from app.core.security import create_access_token
from app.auth.models import Admin
from app.auth.schemas import AdminLogin, AdminResponse, TokenResponse
from app.auth.service import authenticate_admin
from app.auth.dependencies import get_current_admin

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
def login(response: Response, credentials: AdminLogin, db: Session = Depends(get_db)):
    admin = authenticate_admin(db, credentials.email, credentials.password)
    if not admin:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = create_access_token(
        data={"sub": admin.id, "email": admin.email},
        expires_delta=access_token_expires
    )

    # Set cookie
    response.set_cookie(
        key="access_token",
        value=f"Bearer {access_token}",
        httponly=True,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        expires=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )

    audit_log(action="admin_login", user=admin.email, resource=f"admin_id={admin.id}")

    return TokenResponse(access_token=access_token, email=admin.email)


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie("access_token")
    return {"message": "Logged out"}


@router.get("/me", response_model=AdminResponse)
def me(current_admin: Admin = Depends(get_current_admin)):
    return current_admin
