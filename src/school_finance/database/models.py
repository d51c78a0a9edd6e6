'''
Declarative mappings of the store tables the finance dashboard reads.
These mirror the existing tables; they are never used to create them.
'''
from typing import Optional

from sqlalchemy import Boolean, Date, DateTime, Enum, Numeric, PrimaryKeyConstraint, String, Text, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
import datetime
import decimal
import uuid

class Base(DeclarativeBase):
    pass


class Teachers(Base):
    __tablename__ = 'teachers'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='teachers_pkey'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String)
    surname: Mapped[Optional[str]] = mapped_column(String)
    email: Mapped[Optional[str]] = mapped_column(String)
    is_active: Mapped[Optional[bool]] = mapped_column(Boolean)


class DashboardStudents(Base):
    __tablename__ = 'dashboard_students'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='dashboard_students_pkey'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String)
    surname: Mapped[Optional[str]] = mapped_column(String)
    # 'class' is a Python keyword, so the column is exposed as class_name.
    class_name: Mapped[Optional[str]] = mapped_column('class', String)
    is_active: Mapped[Optional[bool]] = mapped_column(Boolean)


class Classes(Base):
    __tablename__ = 'classes'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='classes_pkey'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    class_name: Mapped[Optional[str]] = mapped_column(String)
    teacher_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid)
    teacher_name: Mapped[Optional[str]] = mapped_column(String)
    is_active: Mapped[Optional[bool]] = mapped_column(Boolean)


class Payments(Base):
    __tablename__ = 'payments'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='payments_pkey'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    student_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid)
    amount: Mapped[decimal.Decimal] = mapped_column(Numeric)
    term: Mapped[Optional[str]] = mapped_column(String)
    payment_for: Mapped[Optional[str]] = mapped_column(String)
    payment_date: Mapped[Optional[datetime.date]] = mapped_column(Date)
    payment_method: Mapped[Optional[str]] = mapped_column(String)
    receipt_number: Mapped[Optional[str]] = mapped_column(String)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    created_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(True))


class Payroll(Base):
    __tablename__ = 'payroll'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='payroll_pkey'),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    teacher_id: Mapped[uuid.UUID] = mapped_column(Uuid)
    period_start: Mapped[datetime.date] = mapped_column(Date)
    period_end: Mapped[datetime.date] = mapped_column(Date)
    hours_worked: Mapped[Optional[decimal.Decimal]] = mapped_column(Numeric)
    hourly_rate: Mapped[Optional[decimal.Decimal]] = mapped_column(Numeric)
    base_amount: Mapped[decimal.Decimal] = mapped_column(Numeric)
    bonus: Mapped[Optional[decimal.Decimal]] = mapped_column(Numeric)
    deductions: Mapped[Optional[decimal.Decimal]] = mapped_column(Numeric)
    total_amount: Mapped[Optional[decimal.Decimal]] = mapped_column(Numeric)
    payment_status: Mapped[Optional[str]] = mapped_column(Enum('pending', 'approved', 'paid', 'overdue', name='payment_status_type'))
    payment_date: Mapped[Optional[datetime.date]] = mapped_column(Date)
    payment_method: Mapped[Optional[str]] = mapped_column(String)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    updated_at: Mapped[Optional[datetime.datetime]] = mapped_column(DateTime(True))
