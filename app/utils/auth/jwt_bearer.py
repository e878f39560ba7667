from fastapi import Request, HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from .jwt_handler import verify_access_token
from database import get_db
from sqlalchemy.orm import Session
from crud.token_crud import is_token_revoked


class JWTBearer(HTTPBearer):
    async def __call__(self, request: Request, db: Session = Depends(get_db)):
        credentials: HTTPAuthorizationCredentials = await super().__call__(request)
        if not credentials:
            # only reachable with auto_error=False
            return None
        if credentials.scheme.lower() != "bearer":
            raise HTTPException(status_code=401, detail="Invalid authentication scheme.")
        payload = verify_access_token(credentials.credentials)
        if payload is None:
            raise HTTPException(status_code=401, detail="Invalid or expired token.")
        if is_token_revoked(db, payload.get("jti")):
            raise HTTPException(status_code=401, detail="Token has been revoked.")
        return payload


async def optional_user(request: Request, db: Session = Depends(get_db)) -> dict | None:
    """Decoded access token if a valid one was sent, otherwise None (anonymous caller)."""
    header = request.headers.get("Authorization")
    if not header or not header.lower().startswith("bearer "):
        return None
    try:
        payload = verify_access_token(header.split(" ", 1)[1].strip())
    except HTTPException:
        return None
    if payload is None or is_token_revoked(db, payload.get("jti")):
        return None
    return payload