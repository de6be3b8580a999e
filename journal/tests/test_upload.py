import os
import shutil
import tempfile
import unittest
from io import BytesIO

from openpyxl import Workbook, load_workbook

from journal.core.config import Settings
from journal.core.exceptions import ValidationError
from journal.services.upload import FeedReader, generate_roster_template


class FeedTestCase(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.reader = FeedReader(Settings())

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def write_text(self, name, text):
        path = os.path.join(self.tmpdir, name)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        return path

    def write_xlsx(self, name, rows):
        path = os.path.join(self.tmpdir, name)
        wb = Workbook()
        ws = wb.active
        for row in rows:
            ws.append(row)
        wb.save(path)
        return path


class TestRosterFeed(FeedTestCase):
    def test_csv(self):
        path = self.write_text(
            "roster.csv",
            "Full Name,Group\nIvanov Ivan,G1\n\n Petrov Petr , G2 \nLonely\n",
        )
        self.assertEqual(
            self.reader.read_roster_file(path),
            [("Ivanov Ivan", "G1"), ("Petrov Petr", "G2")],
        )

    def test_xlsx(self):
        path = self.write_xlsx("roster.xlsx", [
            ["Full Name", "Group"],
            ["Ivanov Ivan", "G1"],
            ["Sidorov Sidr", "G2"],
        ])
        self.assertEqual(
            self.reader.read_roster_file(path),
            [("Ivanov Ivan", "G1"), ("Sidorov Sidr", "G2")],
        )

    def test_template_reads_back(self):
        path = os.path.join(self.tmpdir, "template.xlsx")
        with open(path, "wb") as f:
            f.write(generate_roster_template())
        self.assertEqual(self.reader.read_roster_file(path), [("Ivanov Ivan", "G1")])

    def test_unsupported_extension(self):
        path = self.write_text("roster.txt", "Full Name,Group\n")
        with self.assertRaises(ValidationError) as cm:
            self.reader.read_roster_file(path)
        self.assertEqual(cm.exception.code, "VALIDATION_ERROR")
        self.assertEqual(cm.exception.to_dict()["error"]["details"]["allowed"], [".csv", ".xlsx"])

    def test_missing_file(self):
        with self.assertRaises(ValidationError):
            self.reader.read_roster_file(os.path.join(self.tmpdir, "absent.csv"))

    def test_broken_workbook(self):
        path = self.write_text("broken.xlsx", "not a workbook")
        with self.assertRaises(ValidationError):
            self.reader.read_roster_file(path)


class TestSubjectFeed(FeedTestCase):
    def test_subject_and_lessons(self):
        path = self.write_text("math.csv", "Math\nLecture 1\n\nLecture 2\n")
        feed = self.reader.read_subject_file(path)
        self.assertEqual(feed.subject_name, "Math")
        self.assertEqual(feed.lesson_names, ["Lecture 1", "Lecture 2"])

    def test_names_keep_commas(self):
        path = self.write_text("math.csv", "Math, advanced\nLecture 1, intro\n")
        feed = self.reader.read_subject_file(path)
        self.assertEqual(feed.subject_name, "Math, advanced")
        self.assertEqual(feed.lesson_names, ["Lecture 1, intro"])

    def test_subject_without_lessons(self):
        path = self.write_xlsx("physics.xlsx", [["Physics"]])
        feed = self.reader.read_subject_file(path)
        self.assertEqual(feed.subject_name, "Physics")
        self.assertEqual(feed.lesson_names, [])

    def test_empty_file(self):
        path = self.write_text("empty.csv", "\n\n")
        with self.assertRaises(ValidationError):
            self.reader.read_subject_file(path)

    def test_name_list(self):
        path = self.write_text("subjects.csv", "Math\n\nPhysics\nMath\n")
        self.assertEqual(self.reader.read_name_list(path), ["Math", "Physics", "Math"])

    def test_name_list_keeps_commas(self):
        path = self.write_text("subjects.csv", " History, modern \nArt\n")
        self.assertEqual(self.reader.read_name_list(path), ["History, modern", "Art"])

    def test_name_list_unsupported_extension(self):
        path = self.write_text("subjects.txt", "Math\n")
        with self.assertRaises(ValidationError):
            self.reader.read_name_list(path)


class TestRosterTemplate(unittest.TestCase):
    def test_header_and_sample(self):
        wb = load_workbook(BytesIO(generate_roster_template()))
        ws = wb.active
        self.assertEqual(ws.title, "Roster")
        self.assertEqual(ws["A1"].value, "Full Name")
        self.assertEqual(ws["B1"].value, "Group")
        self.assertTrue(ws["A1"].font.bold)
        self.assertEqual(ws["A2"].value, "Ivanov Ivan")


if __name__ == '__main__':
    unittest.main()
