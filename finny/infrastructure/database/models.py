"""SQLAlchemy ORM models for users, money entries, bills and payments"""

import uuid
from sqlalchemy import Column, String, Boolean, Numeric, DateTime, Date, Integer, ForeignKey, Text, Uuid
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

Money = Numeric(12, 2, asdecimal=False)


class User(Base):
    """Account with declared income settings and gamification progress"""

    __tablename__ = "finny_user"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)
    password_hash = Column(Text, nullable=False)
    income = Column(Money, nullable=False, default=0)
    income_frequency = Column(String(16), nullable=False, default="monthly")
    employment_mode = Column(String(16), nullable=False, default="full-time")
    level = Column(Integer, nullable=False, default=1)
    experience = Column(Integer, nullable=False, default=0)
    streak = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    incomes = relationship("Income", back_populates="user", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="user", cascade="all, delete-orphan")
    bills = relationship("Bill", back_populates="user", cascade="all, delete-orphan")


class Income(Base):
    """Income source entry"""

    __tablename__ = "income"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("finny_user.id", ondelete="CASCADE"), nullable=False, index=True)
    source = Column(Text, nullable=False)
    amount = Column(Money, nullable=False)
    frequency = Column(String(16), nullable=False, default="monthly")
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="incomes")


class Expense(Base):
    """Tracked expense entry"""

    __tablename__ = "expense"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("finny_user.id", ondelete="CASCADE"), nullable=False, index=True)
    category = Column(Text, nullable=False)
    amount = Column(Money, nullable=False)
    frequency = Column(String(16), nullable=False, default="monthly")
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="expenses")


class Bill(Base):
    """Expense with due-date tracking and payment history"""

    __tablename__ = "bill"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("finny_user.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    amount = Column(Money, nullable=False)
    category = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    due_date = Column(Date, nullable=False)
    next_due_date = Column(Date, nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=True)
    frequency = Column(String(16), nullable=False, default="monthly")
    reminder_days = Column(Integer, nullable=False, default=3)
    is_paid = Column(Boolean, nullable=False, default=False)
    last_paid = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(16), nullable=False, default="upcoming")
    auto_pay = Column(Boolean, nullable=False, default=False)
    payment_url = Column(Text, nullable=True)
    is_pinned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="bills")
    payments = relationship(
        "BillPayment",
        back_populates="bill",
        cascade="all, delete-orphan",
        order_by="desc(BillPayment.payment_date)",
    )


class BillPayment(Base):
    """Single payment event in a bill's history"""

    __tablename__ = "bill_payment"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    bill_id = Column(Uuid(as_uuid=True), ForeignKey("bill.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Money, nullable=False)
    payment_date = Column(Date, nullable=False)
    notes = Column(Text, nullable=True)
    method = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    bill = relationship("Bill", back_populates="payments")
