from sqlalchemy import Column, Integer, String, DateTime
from database import Base
from datetime import datetime

class RevokedToken(Base):
    """Denylist of token ids (jti) invalidated by logout or refresh rotation."""
    __tablename__ = "revoked_tokens"
    id = Column(Integer, primary_key=True, index=True)
    jti = Column(String(64), unique=True, index=True, nullable=False)
    token_type = Column(String(16), nullable=False)
    user_id = Column(Integer, nullable=True, index=True)
    expires_at = Column(DateTime, nullable=True)
    revoked_at = Column(DateTime, default=datetime.utcnow, nullable=False)
