"""ORM model for shop users (auth and RBAC)."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, false, func

from shop_api.models.base import Base

ROLES = ("user", "admin")


class User(Base):
    """
    Shop customer or administrator account.

    email is unique and stored lower-cased. password_hash is a bcrypt digest
    and must never leave the service. role: 'admin' or 'user'.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, default="user", server_default="user")
    email_verified = Column(Boolean, nullable=False, default=False, server_default=false())
    phone = Column(String(32), nullable=True)
    city = Column(String(255), nullable=True)
    avatar = Column(String(2048), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role!r}>"
