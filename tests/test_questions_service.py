"""Tests for the question bank, practice answers, flashcards and statistics."""

import unittest

from pydantic import ValidationError
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from quizdeck.models import Base, Question, User, UserAnswer, UserRole
from quizdeck.schemas.question import QuestionWrite
from quizdeck.services.questions import (
    AlreadyAnswered,
    InvalidAnswer,
    QuestionNotFound,
    create_question,
    delete_question,
    list_flashcard_subjects,
    list_flashcards,
    list_questions,
    list_unanswered,
    submit_answer,
    update_question,
)
from quizdeck.services.stats import compute_accuracy, get_user_stats


def _session_factory() -> sessionmaker:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def _write(
    statement: str = "What is 2 + 2?",
    alternatives: list[str] | None = None,
    correct_answer: int = 1,
    subject: str = "Mathematics",
) -> QuestionWrite:
    """Build a valid QuestionWrite for tests."""
    return QuestionWrite(
        statement=statement,
        alternatives=alternatives or ["3", "4", "5", "6"],
        correct_answer=correct_answer,
        subject=subject,
    )


class TestQuestionWriteValidation(unittest.TestCase):
    """Questions need a statement, subject, at least 4 non-blank alternatives and a valid index."""

    def test_valid_question(self) -> None:
        body = _write(statement="  Trimmed?  ")
        self.assertEqual(body.statement, "Trimmed?")

    def test_fewer_than_four_alternatives_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _write(alternatives=["a", "b", "c"], correct_answer=0)

    def test_blank_alternative_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _write(alternatives=["a", " ", "c", "d"])

    def test_correct_answer_out_of_range_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _write(correct_answer=4)
        with self.assertRaises(ValidationError):
            _write(correct_answer=-1)

    def test_blank_subject_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _write(subject="   ")


class ServiceTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = _session_factory()()
        self.admin = self._user("admin", UserRole.ADMIN)
        self.student = self._user("student", UserRole.COMMON)

    def tearDown(self) -> None:
        self.db.close()

    def _user(self, username: str, role: UserRole) -> User:
        user = User(
            email=f"{username}@example.com",
            username=username,
            password_hash="x",
            role=role.value,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user


class TestQuestionBank(ServiceTestCase):
    def test_create_and_list_with_author(self) -> None:
        created = create_question(self.db, _write(), author_id=self.admin.id)
        self.assertEqual(created.alternatives, ["3", "4", "5", "6"])
        listed = list_questions(self.db)
        self.assertEqual(len(listed), 1)
        self.assertEqual(listed[0].id, created.id)
        self.assertEqual(listed[0].author_username, "admin")

    def test_list_newest_first(self) -> None:
        first = create_question(self.db, _write(statement="First?"), author_id=self.admin.id)
        second = create_question(self.db, _write(statement="Second?"), author_id=self.admin.id)
        ids = [q.id for q in list_questions(self.db)]
        self.assertEqual(ids, [second.id, first.id])

    def test_update_question(self) -> None:
        created = create_question(self.db, _write(), author_id=self.admin.id)
        updated = update_question(
            self.db,
            created.id,
            _write(statement="What is 3 + 3?", alternatives=["5", "6", "7", "8"]),
        )
        self.assertEqual(updated.statement, "What is 3 + 3?")
        self.assertEqual(updated.alternatives, ["5", "6", "7", "8"])

    def test_update_unknown_question(self) -> None:
        with self.assertRaises(QuestionNotFound):
            update_question(self.db, 999, _write())

    def test_delete_removes_answers(self) -> None:
        created = create_question(self.db, _write(), author_id=self.admin.id)
        submit_answer(self.db, self.student.id, created.id, 1)
        delete_question(self.db, created.id)
        self.assertIsNone(self.db.get(Question, created.id))
        self.assertEqual(self.db.scalar(select(func.count(UserAnswer.id))), 0)

    def test_delete_unknown_question(self) -> None:
        with self.assertRaises(QuestionNotFound):
            delete_question(self.db, 999)


class TestPractice(ServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.q1 = create_question(self.db, _write(statement="Q1?"), author_id=self.admin.id)
        self.q2 = create_question(
            self.db,
            _write(statement="Q2?", subject="Geography", correct_answer=2),
            author_id=self.admin.id,
        )

    def test_unanswered_excludes_answered_and_hides_correct_index(self) -> None:
        submit_answer(self.db, self.student.id, self.q1.id, 1)
        remaining = list_unanswered(self.db, self.student.id)
        self.assertEqual([q.id for q in remaining], [self.q2.id])
        self.assertNotIn("correct_answer", remaining[0].model_dump())

    def test_unanswered_is_per_user(self) -> None:
        submit_answer(self.db, self.student.id, self.q1.id, 1)
        self.assertEqual(len(list_unanswered(self.db, self.admin.id)), 2)

    def test_correct_and_incorrect_answers(self) -> None:
        right = submit_answer(self.db, self.student.id, self.q1.id, 1)
        wrong = submit_answer(self.db, self.student.id, self.q2.id, 0)
        self.assertTrue(right.is_correct)
        self.assertFalse(wrong.is_correct)
        self.assertEqual(wrong.correct_answer, 2)

    def test_answer_twice_rejected(self) -> None:
        submit_answer(self.db, self.student.id, self.q1.id, 1)
        with self.assertRaises(AlreadyAnswered):
            submit_answer(self.db, self.student.id, self.q1.id, 0)

    def test_answer_unknown_question(self) -> None:
        with self.assertRaises(QuestionNotFound):
            submit_answer(self.db, self.student.id, 999, 0)

    def test_answer_index_out_of_range(self) -> None:
        with self.assertRaises(InvalidAnswer):
            submit_answer(self.db, self.student.id, self.q1.id, 4)


class TestFlashcardsAndStats(ServiceTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.math = create_question(self.db, _write(statement="Math?"), author_id=self.admin.id)
        self.geo = create_question(
            self.db,
            _write(statement="Geo?", subject="Geography", correct_answer=2),
            author_id=self.admin.id,
        )
        create_question(self.db, _write(statement="Unanswered?"), author_id=self.admin.id)
        submit_answer(self.db, self.student.id, self.math.id, 1)
        submit_answer(self.db, self.student.id, self.geo.id, 3)

    def test_flashcards_newest_first_with_question(self) -> None:
        cards = list_flashcards(self.db, self.student.id)
        self.assertEqual([c.question.id for c in cards], [self.geo.id, self.math.id])
        self.assertEqual(cards[0].question.correct_answer, 2)
        self.assertEqual(cards[0].selected_answer, 3)
        self.assertFalse(cards[0].is_correct)

    def test_flashcards_filtered(self) -> None:
        by_subject = list_flashcards(self.db, self.student.id, subject="Geography")
        self.assertEqual([c.question.id for c in by_subject], [self.geo.id])
        correct = list_flashcards(self.db, self.student.id, correctness="correct")
        self.assertEqual([c.question.id for c in correct], [self.math.id])
        incorrect = list_flashcards(self.db, self.student.id, correctness="incorrect")
        self.assertEqual([c.question.id for c in incorrect], [self.geo.id])

    def test_flashcards_only_for_owner(self) -> None:
        self.assertEqual(list_flashcards(self.db, self.admin.id), [])

    def test_flashcard_subjects(self) -> None:
        self.assertEqual(
            list_flashcard_subjects(self.db, self.student.id),
            ["Geography", "Mathematics"],
        )

    def test_stats(self) -> None:
        stats = get_user_stats(self.db, self.student.id)
        self.assertEqual(stats.total_answered, 2)
        self.assertEqual(stats.correct_answers, 1)
        self.assertAlmostEqual(stats.accuracy, 50.0)
        self.assertEqual(stats.total_questions, 3)

    def test_stats_without_answers(self) -> None:
        stats = get_user_stats(self.db, self.admin.id)
        self.assertEqual(stats.total_answered, 0)
        self.assertEqual(stats.accuracy, 0.0)

    def test_compute_accuracy(self) -> None:
        self.assertEqual(compute_accuracy(0, 0), 0.0)
        self.assertAlmostEqual(compute_accuracy(2, 3), 66.6666666, places=5)


if __name__ == "__main__":
    unittest.main()
