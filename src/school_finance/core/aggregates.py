'''
This file handles the finance aggregation logic: totals, the monthly
revenue/payroll trend and the breakdowns charted on the finance page.
'''
from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence, Union

from ..common.logger import log
from ..database.db_enums import PayrollStatus
from ..models.finance import (
    FinanceSnapshot,
    FinanceTotals,
    FinanceDashboard,
    MonthlyTrendPoint,
    BreakdownSlice,
    StudentOption,
    PaymentRow,
    PayrollRow,
    SubscriptionPlan,
    Payment,
    PayrollEntry,
)
from .filters import FinanceFilter
from .indexes import EntityIndex
from .payroll import get_payroll_total
from .plans import SUBSCRIPTION_PLANS, CUSTOM_PLAN_LABEL, CUSTOM_PAYMENT_LABEL, match_plan

TOP_STUDENTS_LIMIT = 5


def parse_record_date(value: Optional[Union[datetime, date, str]]) -> Optional[date]:
    """
    Reads a date column as the store returns it.
    Returns None for missing or unparseable values instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip()).date()
    except ValueError:
        return None


def month_key(day: date) -> str:
    return day.strftime("%Y-%m")


def month_label(day: date) -> str:
    return day.strftime("%b %Y")


class FinanceAggregator:
    """
    Computes every dashboard view for one snapshot and one pair of filters.

    The entity index and the filtered collections are built once in the
    constructor; each view method is then a single pass over them.
    """
    def __init__(
        self,
        snapshot: FinanceSnapshot,
        filters: Optional[FinanceFilter] = None,
        catalog: Sequence[SubscriptionPlan] = SUBSCRIPTION_PLANS,
    ):
        self.snapshot = snapshot
        self.filters = filters or FinanceFilter()
        self.catalog = catalog
        self.index = EntityIndex.build(snapshot.teachers, snapshot.students, snapshot.classes)
        self.payments: list[Payment] = self.filters.filter_payments(snapshot.payments, self.index)
        self.payrolls: list[PayrollEntry] = self.filters.filter_payrolls(snapshot.payrolls)

    # --- Scalars ---

    def total_revenue(self) -> Decimal:
        return sum((payment.amount_value for payment in self.payments), Decimal(0))

    def total_payroll(self) -> Decimal:
        return sum((get_payroll_total(entry) for entry in self.payrolls), Decimal(0))

    def totals(self) -> FinanceTotals:
        revenue = self.total_revenue()
        payroll = self.total_payroll()
        return FinanceTotals(revenue=revenue, payroll=payroll, net=revenue - payroll)

    def classes_covered(self) -> int:
        if self.filters.all_teachers:
            return self.index.total_class_count()
        return self.index.class_count(self.filters.teacher_id)

    # --- Series ---

    def monthly_trend(self) -> list[MonthlyTrendPoint]:
        """
        Buckets payments by payment date and payroll by period start into
        calendar months. Records without a usable date are left out.
        """
        buckets: dict[str, dict] = {}

        def add_amount(raw_date, field: str, amount: Decimal, record_id: str):
            day = parse_record_date(raw_date)
            if day is None:
                log.debug(f"Skipping record {record_id} in monthly trend: unusable date {raw_date!r}")
                return
            key = month_key(day)
            if key not in buckets:
                buckets[key] = {"month": month_label(day), "revenue": Decimal(0), "payroll": Decimal(0)}
            buckets[key][field] += amount

        for payment in self.payments:
            add_amount(payment.payment_date, "revenue", payment.amount_value, payment.id)

        for entry in self.payrolls:
            add_amount(entry.period_start, "payroll", get_payroll_total(entry), entry.id)

        return [
            MonthlyTrendPoint(month_key=key, **buckets[key])
            for key in sorted(buckets)
        ]

    def plan_mix(self) -> list[BreakdownSlice]:
        """
        Revenue per catalog plan, in catalog order, followed by the
        "Custom / Other" bucket for payments no plan matched.
        Empty buckets are dropped.
        """
        plan_totals = {plan.code: Decimal(0) for plan in self.catalog}
        custom_total = Decimal(0)

        for payment in self.payments:
            plan = match_plan(payment, self.catalog)
            if plan is not None:
                plan_totals[plan.code] += payment.amount_value
            else:
                custom_total += payment.amount_value

        breakdown = [
            BreakdownSlice(name=plan.label, value=plan_totals[plan.code])
            for plan in self.catalog
            if plan_totals[plan.code] > 0
        ]
        if custom_total > 0:
            breakdown.append(BreakdownSlice(name=CUSTOM_PLAN_LABEL, value=custom_total))
        return breakdown

    def teacher_payouts(self) -> list[BreakdownSlice]:
        totals: dict[str, Decimal] = defaultdict(Decimal)
        for entry in self.payrolls:
            totals[entry.teacher_id] += get_payroll_total(entry)

        return [
            BreakdownSlice(name=self.index.teacher_name(teacher_id), value=value)
            for teacher_id, value in totals.items()
        ]

    def top_students(self, limit: int = TOP_STUDENTS_LIMIT) -> list[BreakdownSlice]:
        """
        The highest-paying students, largest first.
        Payments with no student are ignored; ties keep first-seen order.
        """
        totals: dict[str, Decimal] = defaultdict(Decimal)
        for payment in self.payments:
            if not payment.student_id:
                continue
            totals[payment.student_id] += payment.amount_value

        ranking = sorted(
            (
                BreakdownSlice(name=self.index.student_name(student_id), value=value)
                for student_id, value in totals.items()
            ),
            key=lambda entry: entry.value,
            reverse=True,
        )
        return ranking[:limit]

    def payroll_status_counts(self) -> dict[PayrollStatus, int]:
        counts = {status: 0 for status in PayrollStatus}
        for entry in self.payrolls:
            counts[entry.payment_status] += 1
        return counts

    def student_options(self) -> list[StudentOption]:
        return [
            StudentOption(id=student.id, name=student.display_name, class_name=student.class_name)
            for student in self.filters.student_options(self.snapshot.students, self.index)
        ]

    # --- Ledgers ---

    def payment_label(self, payment: Payment) -> str:
        """The matched plan's label, else what the payment says it was for."""
        plan = match_plan(payment, self.catalog)
        if plan is not None:
            return plan.label
        if payment.payment_for is not None:
            return payment.payment_for
        return CUSTOM_PAYMENT_LABEL

    def payment_rows(self) -> list[PaymentRow]:
        rows = []
        for payment in self.payments:
            student = self.index.student(payment.student_id)
            rows.append(PaymentRow(
                id=payment.id,
                payment_date=parse_record_date(payment.payment_date),
                student_id=payment.student_id,
                student_name=self.index.student_name(payment.student_id),
                class_name=student.class_name if student else None,
                plan=self.payment_label(payment),
                amount=payment.amount_value,
                payment_method=payment.payment_method,
            ))
        return rows

    def payroll_rows(self) -> list[PayrollRow]:
        return [
            PayrollRow(
                id=entry.id,
                teacher_id=entry.teacher_id,
                teacher_name=self.index.teacher_name(entry.teacher_id),
                period_start=parse_record_date(entry.period_start),
                period_end=parse_record_date(entry.period_end),
                hours_worked=entry.hours_worked or Decimal(0),
                base_amount=entry.base_amount or Decimal(0),
                bonus=entry.bonus or Decimal(0),
                deductions=entry.deductions or Decimal(0),
                total=get_payroll_total(entry),
                payment_status=entry.payment_status,
            )
            for entry in self.payrolls
        ]

    # --- Bundle ---

    def dashboard(self, top_students_limit: int = TOP_STUDENTS_LIMIT) -> FinanceDashboard:
        return FinanceDashboard(
            teacher_id=self.filters.teacher_id,
            student_id=self.filters.student_id,
            totals=self.totals(),
            classes_covered=self.classes_covered(),
            monthly_trend=self.monthly_trend(),
            plan_mix=self.plan_mix(),
            teacher_payouts=self.teacher_payouts(),
            top_students=self.top_students(top_students_limit),
            payroll_status_counts=self.payroll_status_counts(),
            student_options=self.student_options(),
            payment_rows=self.payment_rows(),
            payroll_rows=self.payroll_rows(),
        )

    def __repr__(self) -> str:
        return (
            f"FinanceAggregator(teacher_id={self.filters.teacher_id!r}, "
            f"student_id={self.filters.student_id!r}, "
            f"payments={len(self.payments)}, payrolls={len(self.payrolls)})"
        )
