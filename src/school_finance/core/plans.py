'''
The subscription plan catalog and the rules that reconcile a payment
against it.
'''
from decimal import Decimal
from typing import Optional, Sequence

from ..models.finance import Payment, SubscriptionPlan

SUBSCRIPTION_PLANS: tuple[SubscriptionPlan, ...] = (
    SubscriptionPlan(code="3_months", label="3 Months", price=Decimal("6600000")),
    SubscriptionPlan(code="6_months", label="6 Months", price=Decimal("12000000")),
    SubscriptionPlan(code="12_months", label="12 Months", price=Decimal("20400000")),
)

CUSTOM_PLAN_LABEL = "Custom / Other"
# Shown on a single payment that neither matches a plan nor says what it was for.
CUSTOM_PAYMENT_LABEL = "Custom"


def find_plan_by_code(code: str, catalog: Sequence[SubscriptionPlan] = SUBSCRIPTION_PLANS) -> Optional[SubscriptionPlan]:
    return next((plan for plan in catalog if plan.code == code), None)


def find_plan_by_price(amount: Decimal, catalog: Sequence[SubscriptionPlan] = SUBSCRIPTION_PLANS) -> Optional[SubscriptionPlan]:
    # Exact equality; two plans with the same price resolve to the first one.
    return next((plan for plan in catalog if plan.price == amount), None)


def match_plan(payment: Payment, catalog: Sequence[SubscriptionPlan] = SUBSCRIPTION_PLANS) -> Optional[SubscriptionPlan]:
    """
    Resolves a payment to a catalog plan, first match wins:
    1. the plan whose code equals the payment's term,
    2. the first plan whose price equals the payment's amount,
    3. None, meaning a custom payment.
    An unknown term falls through to the price rule.
    """
    if payment.term:
        plan = find_plan_by_code(payment.term, catalog)
        if plan is not None:
            return plan

    return find_plan_by_price(payment.amount_value, catalog)
