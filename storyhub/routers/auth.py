from fastapi import APIRouter, Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel, field_validator
from passlib.context import CryptContext
from typing import Optional
from storyhub.errors import AuthError, NotFoundError, ValidationError
from storyhub.middleware import limiter
from storyhub.state import AppState, get_state
import logging
import re

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/admin", tags=["authentication"])

ADMIN_TOKEN_PREFIX = "admin-token-"

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
security = HTTPBearer(auto_error=False)

# Models
class AdminLogin(BaseModel):
    username: str
    password: str

class PasswordChange(BaseModel):
    oldPassword: str
    newPassword: str

    @field_validator('newPassword')
    @classmethod
    def validate_password(cls, v):
        if len(v) < 8:
            raise ValueError('Password must be at least 8 characters long')
        if not re.search(r'[A-Za-z]', v) or not re.search(r'\d', v):
            raise ValueError('Password must contain letters and numbers')
        return v

# Helper functions
def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognised hash
        return False

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_admin_token(admin_id: str) -> str:
    return f"{ADMIN_TOKEN_PREFIX}{admin_id}"

def admin_id_from_token(token: str) -> Optional[str]:
    if token.startswith(ADMIN_TOKEN_PREFIX):
        return token[len(ADMIN_TOKEN_PREFIX):] or None
    return None

async def require_admin(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> str:
    """Require a bearer token on admin routes.

    Only the presence of the token is checked; tokens carry no signature
    or expiry.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Unauthorized")
    return credentials.credentials

# Routes
@router.post("/login")
@limiter.limit("5/minute")
async def login_admin(request: Request, login: AdminLogin, state: AppState = Depends(get_state)):
    """Log the admin in and return a bearer token"""
    admin = await state.admins.get_by_username(login.username)

    if not admin or not verify_password(login.password, admin.get("password_hash")):
        logger.warning(f"Failed admin login attempt for: {login.username}")
        raise AuthError("Invalid credentials")

    await state.admins.update_last_login(admin["id"])
    logger.info(f"Successful admin login: {login.username}")

    return {
        "token": create_admin_token(admin["id"]),
        "message": "Login successful"
    }

@router.post("/change-password")
async def change_password(
    change: PasswordChange,
    token: str = Depends(require_admin),
    state: AppState = Depends(get_state)
):
    """Change the password of the admin the token belongs to"""
    admin = None
    admin_id = admin_id_from_token(token)
    if admin_id:
        admin = await state.admins.get_by_id(admin_id)
    if admin is None:
        admin = await state.admins.get_first_admin()
    if admin is None:
        raise NotFoundError("Admin account not found")

    if not verify_password(change.oldPassword, admin.get("password_hash")):
        raise ValidationError("Old password is incorrect.")

    await state.admins.update_password(admin["id"], get_password_hash(change.newPassword))
    logger.info(f"Password changed for admin: {admin['username']}")

    return {"message": "Password changed successfully"}
