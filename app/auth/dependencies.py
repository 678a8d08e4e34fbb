from typing import Optional
from fastapi import Request, HTTPException, Depends, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.core.security import decode_access_token
from app.auth.models import Admin

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


def _extract_token(request: Request, header_token: Optional[str]) -> Optional[str]:
    """Cookie first ("Bearer <token>" or raw token), then the Authorization header."""
    cookie = request.cookies.get("access_token")
    if cookie:
        scheme, _, param = cookie.partition(" ")
        return param or scheme
    return header_token


def get_current_admin(
    request: Request,
    header_token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> Admin:
    """
    Resolves the authenticated administrator from the access_token cookie or bearer header.
    """
    token = _extract_token(request, header_token)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = decode_access_token(token)
        admin_id = payload.get("sub")
        if not admin_id or not isinstance(admin_id, str):
            raise credentials_exception
    except JWTError:
        raise credentials_exception

    admin = db.get(Admin, admin_id)
    if not admin:
        raise credentials_exception

    return admin
