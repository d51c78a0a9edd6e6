'''
Narrowing of payments, payroll and the student picker by the selected
teacher and student.
'''
from typing import Iterable

from pydantic import BaseModel

from ..models.finance import Payment, PayrollEntry, Student
from .indexes import EntityIndex

ALL = "all"


class FinanceFilter(BaseModel):
    """
    The teacher and student selectors of the finance page.
    Each one is either "all" or an id.
    """
    teacher_id: str = ALL
    student_id: str = ALL

    @property
    def all_teachers(self) -> bool:
        return self.teacher_id == ALL

    @property
    def all_students(self) -> bool:
        return self.student_id == ALL

    def _student_belongs_to_teacher(self, student: Student, index: EntityIndex) -> bool:
        return index.teacher_id_for_student(student) == self.teacher_id

    def filter_payrolls(self, entries: Iterable[PayrollEntry]) -> list[PayrollEntry]:
        if self.all_teachers:
            return list(entries)
        return [entry for entry in entries if entry.teacher_id == self.teacher_id]

    def filter_payments(self, payments: Iterable[Payment], index: EntityIndex) -> list[Payment]:
        """
        Keeps a payment if it is for the selected student and, when a teacher
        is selected, its student sits in one of that teacher's classes.
        Payments whose student is not in the index never match a teacher.
        """
        kept = []
        for payment in payments:
            if not self.all_students and payment.student_id != self.student_id:
                continue

            if not self.all_teachers:
                student = index.student(payment.student_id)
                if student is None or not self._student_belongs_to_teacher(student, index):
                    continue

            kept.append(payment)
        return kept

    def student_options(self, students: Iterable[Student], index: EntityIndex) -> list[Student]:
        """The students offered in the student picker for the current teacher."""
        if self.all_teachers:
            return list(students)
        return [student for student in students if self._student_belongs_to_teacher(student, index)]
