"""
Personal access tokens. Only the sha256 digest of the secret part is stored;
clients hold "<id>|<secret>".
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from fleet.database import Base


class AccessToken(Base):
    __tablename__ = "personal_access_tokens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    token = Column(String(64), unique=True, nullable=False)
    last_used_at = Column(DateTime)
    created_at = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="tokens")

    def __repr__(self):
        return f"<AccessToken {self.id} user={self.user_id}>"
