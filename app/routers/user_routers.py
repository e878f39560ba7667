from fastapi import APIRouter, HTTPException, Depends, Request, Response, status
from sqlalchemy.orm import Session

from crud.history_crud import HistoryStore, get_history_store
from crud.token_crud import revoke_token, is_token_revoked
from crud.user_crud import DuplicateUserError, user_crud
from database import get_db
from schemas.user_schema import RefreshRequest, UserCreate, UserLogin, UserOut, UserUpdate
from utils.auth.jwt_bearer import JWTBearer
from utils.auth.jwt_handler import (
    create_access_token,
    create_token_pair,
    verify_access_token,
    verify_refresh_token,
)
from utils.config import settings

router = APIRouter(prefix="/users", tags=["users"])

REFRESH_COOKIE = "refresh_token"


def _set_refresh_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
        max_age=settings.REFRESH_TOKEN_EXPIRE_MINUTES * 60,
    )


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(user: UserCreate, response: Response, db: Session = Depends(get_db)):
    try:
        new_user = user_crud.create(db=db, obj_in=user)
    except DuplicateUserError as e:
        raise HTTPException(status_code=409, detail=str(e))
    tokens = create_token_pair(new_user)
    _set_refresh_cookie(response, tokens["refresh_token"])
    return {"user": UserOut.model_validate(new_user), "tokens": tokens}


@router.post("/login")
def login(credentials: UserLogin, response: Response, db: Session = Depends(get_db)):
    user = user_crud.authenticate(
        db, credentials.password, email=credentials.email, username=credentials.username
    )
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    tokens = create_token_pair(user)
    _set_refresh_cookie(response, tokens["refresh_token"])
    return {"user": UserOut.model_validate(user), "tokens": tokens}


@router.post("/refresh")
def generate_new_access_token(
    request: Request,
    body: RefreshRequest | None = None,
    db: Session = Depends(get_db),
):
    # refresh token from body, falling back to the cookie set at login
    token = (body.refresh_token if body else None) or request.cookies.get(REFRESH_COOKIE)
    if not token:
        raise HTTPException(status_code=401, detail="Refresh token missing")

    payload = verify_refresh_token(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired refresh token")
    if is_token_revoked(db, payload.get("jti")):
        raise HTTPException(status_code=401, detail="Refresh token has been revoked")

    user = user_crud.get(db=db, id=payload.get("user_id"))

    access_token = create_access_token({
        "user_id": user.id,
        "email": user.email,
        "username": user.username,
        "is_admin": bool(user.is_admin),
    })
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    }


@router.post("/logout")
def logout(
    request: Request,
    response: Response,
    body: RefreshRequest | None = None,
    db: Session = Depends(get_db),
):
    header = request.headers.get("Authorization")
    if header and header.lower().startswith("bearer "):
        try:
            access_payload = verify_access_token(header.split(" ", 1)[1].strip())
        except HTTPException:
            access_payload = None
        revoke_token(db, access_payload)

    refresh_token = (body.refresh_token if body else None) or request.cookies.get(REFRESH_COOKIE)
    if refresh_token:
        try:
            refresh_payload = verify_refresh_token(refresh_token)
        except HTTPException:
            refresh_payload = None
        revoke_token(db, refresh_payload)

    response.delete_cookie(REFRESH_COOKIE)
    return {"success": True, "detail": "Logged out"}


@router.get("/me")
def get_profile(
    payload: dict = Depends(JWTBearer()),
    db: Session = Depends(get_db),
    store: HistoryStore = Depends(get_history_store),
):
    user = user_crud.get(db=db, id=payload["user_id"])
    return {
        "user": UserOut.model_validate(user),
        "stats": {
            "total_requests": store.count_for_user(str(user.id)),
            "total_watched": store.count_watched(user.id),
        },
    }


@router.put("/me", response_model=UserOut)
def update_profile(
    user_update: UserUpdate,
    payload: dict = Depends(JWTBearer()),
    db: Session = Depends(get_db),
):
    db_user = user_crud.get(db=db, id=payload["user_id"])
    return user_crud.update(db=db, db_obj=db_user, obj_in=user_update)
