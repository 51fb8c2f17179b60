"""User model for the database."""

from sqlalchemy import CheckConstraint, Column, Integer, String, Date, ForeignKey

from components.core.database import Base, TimestampMixin


class User(TimestampMixin, Base):
    """User account together with the profile fields used for personalisation."""
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("gender IN ('male', 'female', 'prefer_not_to_say')", name="ck_users_gender"),
        CheckConstraint("marital_status IN ('Single', 'Engaged', 'Researching')", name="ck_users_marital_status"),
        CheckConstraint("theme_mode IN ('light', 'dark', 'system')", name="ck_users_theme_mode"),
        CheckConstraint("role IN ('user', 'admin')", name="ck_users_role"),
    )

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)  # Hashed password
    registration_date = Column(Date, nullable=False)

    first_name = Column(String(50), nullable=True)
    last_name = Column(String(50), nullable=True)
    full_name = Column(String(101), nullable=True)
    date_of_birth = Column(Date, nullable=True)
    gender = Column(String(20), nullable=True)
    marital_status = Column(String(20), nullable=True)
    country = Column(String(100), nullable=True)
    city = Column(String(100), nullable=True)
    wedding_date = Column(Date, nullable=True)
    theme_mode = Column(String(10), nullable=False, default="system")
    role = Column(String(10), nullable=False, default="user")

    # Denormalised pointer to the connected partner; the couples table is authoritative
    partner_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
