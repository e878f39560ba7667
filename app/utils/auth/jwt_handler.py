from jose import JWTError, ExpiredSignatureError, jwt
from datetime import datetime, timedelta
from fastapi import HTTPException
from passlib.context import CryptContext
from utils.config import settings
import uuid


def _encode(payload: dict, token_type: str, minutes: int, secret: str) -> str:
    to_encode = payload.copy()
    now = datetime.utcnow()
    to_encode.update({
        "exp": now + timedelta(minutes=minutes),
        "iat": now,
        "jti": str(uuid.uuid4()),
        "type": token_type,
    })
    return jwt.encode(to_encode, secret, algorithm=settings.ALGORITHM)


def create_access_token(payload: dict) -> str:
    return _encode(payload, "access", settings.ACCESS_TOKEN_EXPIRE_MINUTES, settings.SECRET_KEY_ACCESS)


def create_refresh_token(payload: dict) -> str:
    return _encode(payload, "refresh", settings.REFRESH_TOKEN_EXPIRE_MINUTES, settings.SECRET_KEY_REFRESH)


def create_token_pair(user) -> dict:
    token_data = {
        "user_id": user.id,
        "email": user.email,
        "username": user.username,
        "is_admin": bool(user.is_admin),
    }
    return {
        "access_token": create_access_token(token_data),
        "refresh_token": create_refresh_token({"user_id": user.id}),
        "token_type": "bearer",
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    }


def verify_access_token(token: str) -> dict | None:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY_ACCESS, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired, please login again")
    except JWTError:
        return None
    return payload if payload.get("type") == "access" else None


def verify_refresh_token(token: str) -> dict | None:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY_REFRESH, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Refresh token has expired, please login again")
    except JWTError:
        return None
    return payload if payload.get("type") == "refresh" else None


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str):
    return pwd_context.hash(password)

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)
