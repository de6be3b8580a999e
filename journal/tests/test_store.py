import unittest
from datetime import date

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from journal.core.exceptions import InvalidGradeCodeError
from journal.models.grade_value import GradeValue
from journal.schemas.common import ErrorKind
from journal.schemas.grade import GradeRecord
from journal.schemas.group import GroupRecord
from journal.schemas.student import StudentRecord
from journal.schemas.subject import LessonRecord, SubjectRecord
from journal.tests import StoreTestCase


class TestGroups(StoreTestCase):
    def test_insert_and_find(self):
        result = self.store.groups.insert(GroupRecord(name="G1"))
        self.assertTrue(result.success)
        self.assertEqual(self.store.groups.find_by_id(result.value), GroupRecord(id=result.value, name="G1"))

    def test_find_missing(self):
        self.assertIsNone(self.store.groups.find_by_id(42))

    def test_find_all(self):
        self.assertEqual(self.store.groups.find_all(), [])
        self.store.groups.insert(GroupRecord(name="G1"))
        self.store.groups.insert(GroupRecord(name="G2"))
        self.assertEqual([g.name for g in self.store.groups.find_all()], ["G1", "G2"])

    def test_duplicate_names_allowed(self):
        first = self.store.groups.insert(GroupRecord(name="G1"))
        second = self.store.groups.insert(GroupRecord(name="G1"))
        self.assertTrue(first and second)
        self.assertNotEqual(first.value, second.value)
        self.assertEqual(self.store.groups.find_by_name("G1").id, first.value)

    def test_update(self):
        group_id = self.store.groups.insert(GroupRecord(name="G1")).value
        result = self.store.groups.update(GroupRecord(id=group_id, name="G1-renamed"))
        self.assertTrue(result)
        self.assertEqual(self.store.groups.find_by_id(group_id).name, "G1-renamed")

    def test_update_missing(self):
        result = self.store.groups.update(GroupRecord(id=99, name="nope"))
        self.assertFalse(result)
        self.assertEqual(result.error_kind, ErrorKind.NOT_FOUND)

    def test_update_without_id(self):
        result = self.store.groups.update(GroupRecord(name="nope"))
        self.assertEqual(result.error_kind, ErrorKind.NOT_FOUND)

    def test_delete(self):
        group_id = self.store.groups.insert(GroupRecord(name="G1")).value
        self.assertTrue(self.store.groups.delete_by_id(group_id))
        self.assertIsNone(self.store.groups.find_by_id(group_id))
        result = self.store.groups.delete_by_id(group_id)
        self.assertFalse(result)
        self.assertEqual(result.error_kind, ErrorKind.NOT_FOUND)

    def test_ids_are_not_reused(self):
        first = self.store.groups.insert(GroupRecord(name="G1")).value
        self.store.groups.delete_by_id(first)
        second = self.store.groups.insert(GroupRecord(name="G2")).value
        self.assertGreater(second, first)


class TestSubjectsAndLessons(StoreTestCase):
    def test_find_by_name(self):
        subject_id = self.store.subjects.insert(SubjectRecord(name="Math")).value
        self.assertEqual(self.store.subjects.find_by_name("Math"), SubjectRecord(id=subject_id, name="Math"))
        self.assertIsNone(self.store.subjects.find_by_name("math"))

    def test_lessons_of_subject(self):
        math = self.store.subjects.insert(SubjectRecord(name="Math")).value
        physics = self.store.subjects.insert(SubjectRecord(name="Physics")).value
        l1 = self.store.lessons.insert(LessonRecord(name="Lecture 1", subject_id=math)).value
        l2 = self.store.lessons.insert(LessonRecord(name="Lecture 2", subject_id=math)).value
        self.store.lessons.insert(LessonRecord(name="Lab 1", subject_id=physics))

        lessons = self.store.lessons.find_by_subject_id(math)
        self.assertEqual([lesson.id for lesson in lessons], [l1, l2])
        self.assertEqual(lessons[0].name, "Lecture 1")

        result = self.store.lessons.delete_by_subject_id(math)
        self.assertTrue(result)
        self.assertEqual(result.value, 2)
        self.assertEqual(self.store.lessons.find_by_subject_id(math), [])
        self.assertEqual(len(self.store.lessons.find_by_subject_id(physics)), 1)

    def test_lesson_round_trip(self):
        math = self.store.subjects.insert(SubjectRecord(name="Math")).value
        lesson = LessonRecord(name="Lecture 1", subject_id=math)
        lesson_id = self.store.lessons.insert(lesson).value
        found = self.store.lessons.find_by_id(lesson_id)
        self.assertEqual((found.id, found.name, found.subject_id), (lesson_id, "Lecture 1", math))

    def test_lesson_update(self):
        math = self.store.subjects.insert(SubjectRecord(name="Math")).value
        physics = self.store.subjects.insert(SubjectRecord(name="Physics")).value
        lesson_id = self.store.lessons.insert(LessonRecord(name="Lecture 1", subject_id=math)).value
        self.assertTrue(self.store.lessons.update(LessonRecord(id=lesson_id, name="Lab", subject_id=physics)))
        found = self.store.lessons.find_by_id(lesson_id)
        self.assertEqual((found.name, found.subject_id), ("Lab", physics))

    def test_lesson_with_unknown_subject(self):
        result = self.store.lessons.insert(LessonRecord(name="Orphan", subject_id=999))
        self.assertFalse(result)
        self.assertEqual(result.identity, -1)
        self.assertEqual(result.error_kind, ErrorKind.CONSTRAINT_VIOLATION)
        self.assertEqual(self.store.lessons.find_all(), [])


class TestStudents(StoreTestCase):
    def setUp(self):
        super().setUp()
        self.g1 = self.store.groups.insert(GroupRecord(name="G1")).value
        self.g2 = self.store.groups.insert(GroupRecord(name="G2")).value

    def test_round_trip(self):
        student_id = self.store.students.insert(StudentRecord(full_name="Ivanov", group_id=self.g1)).value
        found = self.store.students.find_by_id(student_id)
        self.assertEqual((found.id, found.full_name, found.group_id), (student_id, "Ivanov", self.g1))

    def test_find_and_delete_by_group(self):
        self.store.students.insert(StudentRecord(full_name="Ivanov", group_id=self.g1))
        self.store.students.insert(StudentRecord(full_name="Petrov", group_id=self.g1))
        self.store.students.insert(StudentRecord(full_name="Sidorov", group_id=self.g2))

        self.assertEqual(
            [s.full_name for s in self.store.students.find_by_group_id(self.g1)],
            ["Ivanov", "Petrov"],
        )
        result = self.store.students.delete_by_group_id(self.g1)
        self.assertEqual(result.value, 2)
        self.assertEqual(self.store.students.find_by_group_id(self.g1), [])
        self.assertEqual(len(self.store.students.find_by_group_id(self.g2)), 1)

    def test_delete_by_group_with_no_students(self):
        result = self.store.students.delete_by_group_id(self.g2)
        self.assertTrue(result)
        self.assertEqual(result.value, 0)

    def test_move_to_other_group(self):
        student_id = self.store.students.insert(StudentRecord(full_name="Ivanov", group_id=self.g1)).value
        self.assertTrue(self.store.students.update(StudentRecord(id=student_id, full_name="Ivanov", group_id=self.g2)))
        self.assertEqual(self.store.students.find_by_id(student_id).group_id, self.g2)

    def test_move_to_unknown_group_fails(self):
        student_id = self.store.students.insert(StudentRecord(full_name="Ivanov", group_id=self.g1)).value
        result = self.store.students.update(StudentRecord(id=student_id, full_name="Ivanov", group_id=999))
        self.assertEqual(result.error_kind, ErrorKind.CONSTRAINT_VIOLATION)
        self.assertEqual(self.store.students.find_by_id(student_id).group_id, self.g1)


class TestStoredGradeCodes(StoreTestCase):
    def setUp(self):
        super().setUp()
        group_id = self.store.groups.insert(GroupRecord(name="G1")).value
        subject_id = self.store.subjects.insert(SubjectRecord(name="Math")).value
        self.student_id = self.store.students.insert(StudentRecord(full_name="Ivanov", group_id=group_id)).value
        self.lesson_id = self.store.lessons.insert(LessonRecord(name="Lecture 1", subject_id=subject_id)).value

    def _insert_raw(self, code):
        with self.db.session() as session:
            session.execute(
                text("INSERT INTO grades (student_id, lesson_id, grade) VALUES (:s, :l, :g)"),
                {"s": self.student_id, "l": self.lesson_id, "g": code},
            )

    def test_round_trip(self):
        grade = GradeRecord(
            student_id=self.student_id,
            lesson_id=self.lesson_id,
            value=GradeValue.GRADE_4,
            date_recorded=date(2024, 9, 1),
        )
        grade_id = self.store.grades.insert(grade).value
        self.assertEqual(self.store.grades.find_by_id(grade_id), grade.model_copy(update={"id": grade_id}))

    def test_date_defaults_in_database(self):
        self._insert_raw(7)
        grade = self.store.grades.find_by_student_and_lesson(self.student_id, self.lesson_id)
        self.assertIs(grade.value, GradeValue.PRESENT)
        self.assertIsInstance(grade.date_recorded, date)

    def test_schema_accepts_8_to_10_but_decoding_fails(self):
        self._insert_raw(9)
        with self.assertRaises(InvalidGradeCodeError):
            self.store.grades.find_by_student_and_lesson(self.student_id, self.lesson_id)

    def test_check_constraint(self):
        with self.assertRaises(IntegrityError):
            self._insert_raw(11)
        self.assertEqual(self.store.grades.find_all(), [])


class TestStorageFailures(StoreTestCase):
    def test_missing_tables_are_io_failures(self):
        self.db.drop_all()
        result = self.store.groups.insert(GroupRecord(name="G1"))
        self.assertFalse(result)
        self.assertEqual(result.error_kind, ErrorKind.IO_FAILURE)
        self.assertEqual(result.identity, -1)
        self.assertIsNone(self.store.groups.find_by_id(1))
        self.assertEqual(self.store.groups.find_all(), [])
        self.assertEqual(self.store.groups.delete_by_id(1).error_kind, ErrorKind.IO_FAILURE)
        self.assertFalse(self.store.links.exists(1, 1))
        self.db.create_all()

    def test_failures_are_logged(self):
        with self.assertLogs("journal.services.base", level="ERROR"):
            self.store.students.insert(StudentRecord(full_name="Ivanov", group_id=999))


if __name__ == '__main__':
    unittest.main()
