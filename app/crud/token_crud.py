from sqlalchemy.orm import Session
from model.revoked_token import RevokedToken
from datetime import datetime


def revoke_token(db: Session, payload: dict | None):
    """Put a decoded token's jti on the denylist. Returns None for payloads without one."""
    if not payload or not payload.get("jti"):
        return None
    jti = payload["jti"]
    existing = db.query(RevokedToken).filter(RevokedToken.jti == jti).first()
    if existing:
        return existing
    exp = payload.get("exp")
    rt = RevokedToken(
        jti=jti,
        token_type=payload.get("type") or "access",
        user_id=payload.get("user_id"),
        expires_at=datetime.utcfromtimestamp(exp) if exp else None,
        revoked_at=datetime.utcnow(),
    )
    db.add(rt)
    db.commit()
    db.refresh(rt)
    return rt


def is_token_revoked(db: Session, jti: str | None) -> bool:
    if not jti:
        return False
    return db.query(RevokedToken).filter(RevokedToken.jti == jti).first() is not None


def purge_expired(db: Session) -> int:
    # rows for tokens past their own exp
    count = (
        db.query(RevokedToken)
        .filter(RevokedToken.expires_at.isnot(None), RevokedToken.expires_at < datetime.utcnow())
        .delete(synchronize_session=False)
    )
    db.commit()
    return count
