"""
SQLAlchemy ORM models for the finance tracker.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Numeric,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
import uuid

Base = declarative_base()

# Monetary columns: up to 99,999,999.99
Money = Numeric(10, 2, asdecimal=True)


def generate_uuid():
    return str(uuid.uuid4())


class AuditMixin:
    """Mixin for audit fields on all models."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
    is_deleted = Column(Boolean, default=False, nullable=False)


class User(AuditMixin, Base):
    """User model for authentication."""

    __tablename__ = "users"

    id = Column(String, primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Profile
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_image_url = Column(String(500), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    # Timestamps for auth events
    last_login_at = Column(DateTime, nullable=True)
    password_changed_at = Column(DateTime, nullable=True)

    # Relationships
    transactions = relationship(
        "Transaction",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )
    budgets = relationship(
        "Budget",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )
    savings_goals = relationship(
        "SavingsGoal",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )
    refresh_tokens = relationship(
        "RefreshToken",
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="dynamic",
    )


class Transaction(AuditMixin, Base):
    """A single income or expense entry."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(String(10), nullable=False)  # 'income' or 'expense'
    amount = Column(Money, nullable=False)
    category = Column(String(50), nullable=False)
    description = Column(Text)
    date = Column(Date, nullable=False, index=True)

    user = relationship("User", back_populates="transactions")


class Budget(AuditMixin, Base):
    """Monthly spending limit for one expense category."""

    __tablename__ = "budgets"
    __table_args__ = (
        UniqueConstraint("user_id", "category", "month", name="uq_budget_user_category_month"),
    )

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    category = Column(String(50), nullable=False)
    monthly_limit = Column(Money, nullable=False)
    month = Column(String(7), nullable=False)  # YYYY-MM

    user = relationship("User", back_populates="budgets")


class SavingsGoal(AuditMixin, Base):
    """Savings target with current progress."""

    __tablename__ = "savings_goals"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    target_amount = Column(Money, nullable=False)
    current_amount = Column(Money, nullable=False, default=0)
    target_date = Column(Date, nullable=True)
    icon = Column(String(50), default="piggy-bank")

    user = relationship("User", back_populates="savings_goals")


class FinancialTip(AuditMixin, Base):
    """Financial education content, shared by all users."""

    __tablename__ = "financial_tips"

    id = Column(String, primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(50), nullable=False)  # budgeting, saving, investing, debt
    difficulty = Column(String(20), nullable=False)  # beginner, intermediate, advanced


class PasswordResetToken(AuditMixin, Base):
    """Password reset token."""

    __tablename__ = "password_reset_tokens"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    token = Column(String(255), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    used_at = Column(DateTime, nullable=True)


class RefreshToken(AuditMixin, Base):
    """Refresh token for JWT authentication."""

    __tablename__ = "refresh_tokens"

    id = Column(String, primary_key=True, default=generate_uuid)
    user_id = Column(String, ForeignKey("users.id"), nullable=False)
    token_hash = Column(String(255), nullable=False, index=True)  # Store hash, not token
    expires_at = Column(DateTime, nullable=False)
    revoked_at = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="refresh_tokens")
