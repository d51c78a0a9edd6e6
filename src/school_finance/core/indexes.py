'''
In-memory lookups over the teacher, student and class collections.
'''
from typing import Iterable, Optional

from ..models.finance import Teacher, Student, SchoolClass, UNKNOWN_LABEL


class EntityIndex:
    """
    Read-only id lookups built once per aggregation pass.

    Students are related to teachers only through their class: a student's
    `class_name` is looked up in `class_teacher_map` to find the teacher who
    owns that class.
    """
    def __init__(
        self,
        teachers_by_id: dict[str, Teacher],
        students_by_id: dict[str, Student],
        class_teacher_map: dict[str, str],
        classes_by_teacher: dict[str, int],
    ):
        self.teachers_by_id = teachers_by_id
        self.students_by_id = students_by_id
        self.class_teacher_map = class_teacher_map
        self.classes_by_teacher = classes_by_teacher

    @classmethod
    def build(
        cls,
        teachers: Iterable[Teacher],
        students: Iterable[Student],
        classes: Iterable[SchoolClass],
    ) -> "EntityIndex":
        """Builds the index without touching the input collections."""
        teachers_by_id = {teacher.id: teacher for teacher in teachers}
        students_by_id = {student.id: student for student in students}

        class_teacher_map: dict[str, str] = {}
        classes_by_teacher: dict[str, int] = {}
        for school_class in classes:
            if school_class.class_name and school_class.teacher_id:
                # Later classes with the same name take over the mapping.
                class_teacher_map[school_class.class_name] = school_class.teacher_id
            if school_class.teacher_id:
                classes_by_teacher[school_class.teacher_id] = classes_by_teacher.get(school_class.teacher_id, 0) + 1

        return cls(teachers_by_id, students_by_id, class_teacher_map, classes_by_teacher)

    # --- Lookups ---

    def teacher(self, teacher_id: Optional[str]) -> Optional[Teacher]:
        if teacher_id is None:
            return None
        return self.teachers_by_id.get(teacher_id)

    def student(self, student_id: Optional[str]) -> Optional[Student]:
        if student_id is None:
            return None
        return self.students_by_id.get(student_id)

    def teacher_id_for_class(self, class_name: Optional[str]) -> Optional[str]:
        if not class_name:
            return None
        return self.class_teacher_map.get(class_name)

    def teacher_id_for_student(self, student: Student) -> Optional[str]:
        """Resolves the teacher who owns the student's class, if any."""
        return self.teacher_id_for_class(student.class_name)

    def class_count(self, teacher_id: str) -> int:
        return self.classes_by_teacher.get(teacher_id, 0)

    def total_class_count(self) -> int:
        return sum(self.classes_by_teacher.values())

    def teacher_name(self, teacher_id: Optional[str]) -> str:
        teacher = self.teacher(teacher_id)
        return teacher.display_name if teacher else UNKNOWN_LABEL

    def student_name(self, student_id: Optional[str]) -> str:
        student = self.student(student_id)
        return student.display_name if student else UNKNOWN_LABEL

    def __repr__(self) -> str:
        return (
            f"EntityIndex(teachers={len(self.teachers_by_id)}, "
            f"students={len(self.students_by_id)}, "
            f"classes={self.total_class_count()})"
        )
