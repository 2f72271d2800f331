import pytest
from rest_framework.test import APIClient

from accounts.models import User
from courses.models import Course, Enrollment, Lesson, Series
from grading.models import (
    Assignment,
    AssignmentQuestion,
    PublicationStatus,
    Quiz,
    QuizOption,
    QuizQuestion,
)


@pytest.fixture
def student(db):
    return User.objects.create_user(
        email="student@example.com", first_name="Hana", last_name="Tesfaye", password="s3cret-pass"
    )


@pytest.fixture
def other_student(db):
    return User.objects.create_user(email="other@example.com", first_name="Dawit", password="s3cret-pass")


@pytest.fixture
def grader(db):
    return User.objects.create_user(
        email="grader@example.com", first_name="Selam", password="s3cret-pass", is_staff=True
    )


@pytest.fixture
def series(db):
    return Series.objects.create(title="Data Science Diploma")


@pytest.fixture
def course(series):
    return Course.objects.create(series=series, title="Python Basics", position=1)


@pytest.fixture
def enrollment(student, series):
    return Enrollment.objects.create(user=student, series=series)


@pytest.fixture
def make_lessons():
    def _make(course, count=1):
        return [
            Lesson.objects.create(course=course, title=f"Lesson {n}", position=n)
            for n in range(1, count + 1)
        ]
    return _make


@pytest.fixture
def make_quiz(series, course):
    """Quiz with one correct and one wrong option per question."""
    def _make(points=(5, 5), course=course, publication_status=PublicationStatus.PUBLISHED, due_at=None):
        quiz = Quiz.objects.create(
            series=series,
            course=course,
            title="Checkpoint quiz",
            publication_status=publication_status,
            due_at=due_at,
        )
        for position, question_points in enumerate(points, start=1):
            question = QuizQuestion.objects.create(
                quiz=quiz, prompt=f"Question {position}", points=question_points, position=position
            )
            QuizOption.objects.create(question=question, option="Right", is_correct=True, position=1)
            QuizOption.objects.create(question=question, option="Wrong", is_correct=False, position=2)
        return quiz
    return _make


@pytest.fixture
def make_assignment(series, course):
    def _make(points=(10, 10), course=course, publication_status=PublicationStatus.PUBLISHED, due_at=None):
        assignment = Assignment.objects.create(
            series=series,
            course=course,
            title="Project report",
            publication_status=publication_status,
            due_at=due_at,
        )
        for position, question_points in enumerate(points, start=1):
            AssignmentQuestion.objects.create(
                assignment=assignment, prompt=f"Task {position}", points=question_points, position=position
            )
        return assignment
    return _make


@pytest.fixture
def api_client():
    return APIClient()
