import logging
from datetime import datetime

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session

from model.user import User
from schemas.user_schema import UserCreate, UserUpdate
from utils.auth.jwt_handler import hash_password, verify_password

logger = logging.getLogger(__name__)


class DuplicateUserError(ValueError):
    pass


class CRUDUser:
    def __init__(self, model=User):
        self.model = model

    def get(self, db: Session, id: int) -> User:
        user = db.get(self.model, id)
        if user is None or not user.is_active:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    def create(self, db: Session, obj_in: UserCreate) -> User:
        existing_user = (
            db.query(User)
            .filter(or_(User.email == obj_in.email, User.username == obj_in.username))
            .first()
        )
        if existing_user:
            if existing_user.email == obj_in.email:
                raise DuplicateUserError("A user with this email already exists.")
            raise DuplicateUserError("This username is already taken.")
        new_user = User(
            email=obj_in.email,
            username=obj_in.username,
            full_name=obj_in.full_name,
            avatar_url=str(obj_in.avatar_url) if obj_in.avatar_url else None,
            password_hash=hash_password(obj_in.password),
        )
        db.add(new_user)
        db.commit()
        db.refresh(new_user)
        logger.info("user.created id=%s", new_user.id)
        return new_user

    def authenticate(self, db: Session, password: str, email: str | None = None,
                     username: str | None = None) -> User | None:
        """Active user matching email (preferred) or username and password, else None."""
        query = db.query(User).filter(User.is_active.is_(True))
        if email:
            query = query.filter(User.email == email)
        else:
            query = query.filter(User.username == username)
        user = query.first()
        if not user or not verify_password(password, user.password_hash):
            return None
        user.last_login = datetime.utcnow()
        db.commit()
        db.refresh(user)
        return user

    def update(self, db: Session, db_obj: User, obj_in: UserUpdate) -> User:
        # json mode so HttpUrl lands in the row as a plain string
        for key, value in obj_in.model_dump(mode="json", exclude_unset=True).items():
            setattr(db_obj, key, value)
        db_obj.updated_at = datetime.utcnow()
        db.commit()
        db.refresh(db_obj)
        return db_obj


user_crud = CRUDUser(User)
