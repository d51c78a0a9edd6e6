'''
testing the teacher / student filters
'''
from tests.constants import (
    FIN_TEACHER_A_ID, FIN_TEACHER_B_ID, FIN_UNKNOWN_TEACHER_ID,
    FIN_STUDENT_A1_ID, FIN_STUDENT_A2_ID, FIN_STUDENT_B1_ID, FIN_STUDENT_X_ID,
)
from school_finance.core.filters import ALL, FinanceFilter
from school_finance.core.indexes import EntityIndex
from school_finance.models.finance import FinanceSnapshot, Payment


def build_index(snapshot: FinanceSnapshot) -> EntityIndex:
    return EntityIndex.build(snapshot.teachers, snapshot.students, snapshot.classes)

def payment_ids(payments: list[Payment]) -> list[str]:
    return [payment.id for payment in payments]


class TestPayrollFilter:

    def test_all_keeps_everything(self, finance_snapshot: FinanceSnapshot):
        kept = FinanceFilter().filter_payrolls(finance_snapshot.payrolls)
        assert len(kept) == len(finance_snapshot.payrolls)

    def test_by_teacher(self, finance_snapshot: FinanceSnapshot):
        kept = FinanceFilter(teacher_id=FIN_TEACHER_A_ID).filter_payrolls(finance_snapshot.payrolls)
        assert [entry.id for entry in kept] == ["payroll-1", "payroll-2"]

    def test_unknown_teacher_keeps_own_lines(self, finance_snapshot: FinanceSnapshot):
        kept = FinanceFilter(teacher_id=FIN_UNKNOWN_TEACHER_ID).filter_payrolls(finance_snapshot.payrolls)
        assert [entry.id for entry in kept] == ["payroll-4"]

    def test_student_filter_does_not_touch_payroll(self, finance_snapshot: FinanceSnapshot):
        kept = FinanceFilter(student_id=FIN_STUDENT_A1_ID).filter_payrolls(finance_snapshot.payrolls)
        assert len(kept) == 4


class TestPaymentFilter:

    def test_all_keeps_everything(self, finance_snapshot: FinanceSnapshot):
        index = build_index(finance_snapshot)
        kept = FinanceFilter(teacher_id=ALL, student_id=ALL).filter_payments(finance_snapshot.payments, index)
        assert payment_ids(kept) == ["pay-1", "pay-2", "pay-3", "pay-4", "pay-5", "pay-6"]

    def test_by_student(self, finance_snapshot: FinanceSnapshot):
        index = build_index(finance_snapshot)
        kept = FinanceFilter(student_id=FIN_STUDENT_A1_ID).filter_payments(finance_snapshot.payments, index)
        assert payment_ids(kept) == ["pay-1", "pay-2"]

    def test_by_teacher_goes_through_class(self, finance_snapshot: FinanceSnapshot):
        index = build_index(finance_snapshot)

        kept_a = FinanceFilter(teacher_id=FIN_TEACHER_A_ID).filter_payments(finance_snapshot.payments, index)
        kept_b = FinanceFilter(teacher_id=FIN_TEACHER_B_ID).filter_payments(finance_snapshot.payments, index)

        assert payment_ids(kept_a) == ["pay-1", "pay-2", "pay-3"]
        assert payment_ids(kept_b) == ["pay-4"]

    def test_teacher_filter_drops_unresolvable_payments(self, finance_snapshot: FinanceSnapshot):
        """No student, an unknown student, or a student without a class never match a teacher."""
        finance_snapshot.payments.append(
            Payment(id="pay-ghost", student_id="ghost-student", amount=100)
        )
        index = build_index(finance_snapshot)
        kept = FinanceFilter(teacher_id=FIN_TEACHER_A_ID).filter_payments(finance_snapshot.payments, index)

        assert "pay-5" not in payment_ids(kept)
        assert "pay-6" not in payment_ids(kept)
        assert "pay-ghost" not in payment_ids(kept)

    def test_teacher_and_student_combined(self, finance_snapshot: FinanceSnapshot):
        index = build_index(finance_snapshot)

        matching = FinanceFilter(teacher_id=FIN_TEACHER_A_ID, student_id=FIN_STUDENT_A2_ID)
        mismatched = FinanceFilter(teacher_id=FIN_TEACHER_B_ID, student_id=FIN_STUDENT_A2_ID)

        assert payment_ids(matching.filter_payments(finance_snapshot.payments, index)) == ["pay-3"]
        assert mismatched.filter_payments(finance_snapshot.payments, index) == []


class TestStudentOptions:

    def test_all_teachers_lists_every_student(self, finance_snapshot: FinanceSnapshot):
        index = build_index(finance_snapshot)
        options = FinanceFilter().student_options(finance_snapshot.students, index)
        assert [student.id for student in options] == [
            FIN_STUDENT_A1_ID, FIN_STUDENT_A2_ID, FIN_STUDENT_B1_ID, FIN_STUDENT_X_ID
        ]

    def test_restricted_to_teacher_classes(self, finance_snapshot: FinanceSnapshot):
        index = build_index(finance_snapshot)

        options_a = FinanceFilter(teacher_id=FIN_TEACHER_A_ID).student_options(finance_snapshot.students, index)
        options_b = FinanceFilter(teacher_id=FIN_TEACHER_B_ID).student_options(finance_snapshot.students, index)

        assert [student.id for student in options_a] == [FIN_STUDENT_A1_ID, FIN_STUDENT_A2_ID]
        assert [student.id for student in options_b] == [FIN_STUDENT_B1_ID]

    def test_teacher_without_classes_has_no_options(self, finance_snapshot: FinanceSnapshot):
        index = build_index(finance_snapshot)
        options = FinanceFilter(teacher_id=FIN_UNKNOWN_TEACHER_ID).student_options(finance_snapshot.students, index)
        assert options == []
