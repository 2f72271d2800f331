from decimal import Decimal

import pytest
from django.db import DatabaseError

from grading.exceptions import (
    AlreadySubmitted,
    InvalidMarks,
    InvalidQuestion,
    InvalidState,
    NotFound,
    StorageError,
)
from grading.models import AssignmentAnswer, AssignmentSubmission, SubmissionStatus
from grading.services import (
    get_assignment_submission,
    grade_assignment,
    regrade_assignment,
    submit_assignment,
)


def _questions(assignment):
    return list(assignment.questions.order_by('position'))


@pytest.fixture
def assignment(make_assignment):
    return make_assignment(points=(10, 10))


@pytest.fixture
def submission(student, enrollment, assignment):
    q1, q2 = _questions(assignment)
    result = submit_assignment(student, assignment.pk, [
        {'question_id': q1.pk, 'text': "First answer"},
        {'question_id': q2.pk, 'text': "Second answer"},
    ])
    return AssignmentSubmission.objects.get(pk=result.submission_id)


def test_submit_assignment_records_answers(submission, assignment):
    assert submission.status == SubmissionStatus.SUBMITTED
    assert submission.total_grade is None
    assert submission.answers.count() == 2
    assert set(submission.answers.values_list('answer_text', flat=True)) == {"First answer", "Second answer"}


def test_second_assignment_submission_is_rejected(student, submission, assignment):
    q1, _ = _questions(assignment)

    with pytest.raises(AlreadySubmitted):
        submit_assignment(student, assignment.pk, [{'question_id': q1.pk, 'text': "Again"}])

    assert AssignmentSubmission.objects.filter(assignment=assignment).count() == 1


def test_grade_then_regrade_replaces_mark(submission, assignment, grader):
    q1, _ = _questions(assignment)

    result = grade_assignment(
        submission.pk, [{'question_id': q1.pk, 'marks_awarded': 7}], overall_feedback="Good start", grader=grader
    )
    assert result.total_grade == 7
    assert result.percentage == 35
    assert result.status == SubmissionStatus.GRADED

    submission.refresh_from_db()
    assert submission.graded_by == grader
    assert submission.graded_at is not None
    assert submission.feedback == "Good start"

    result = regrade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': 9}])
    assert result.total_grade == 9
    assert result.percentage == 45
    assert AssignmentAnswer.objects.get(submission=submission, question=q1).points_awarded == 9


def test_first_grading_totals_only_the_marks_sent(submission, assignment):
    q1, _ = _questions(assignment)

    result = grade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': 5}])

    assert result.total_grade == 5
    assert result.total_possible == 20


def test_partial_regrade_keeps_other_marks(submission, assignment):
    q1, q2 = _questions(assignment)
    grade_assignment(submission.pk, [
        {'question_id': q1.pk, 'marks_awarded': 7},
        {'question_id': q2.pk, 'marks_awarded': 8},
    ])

    result = regrade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': 9}])

    assert result.total_grade == 17
    assert result.percentage == 85


@pytest.mark.parametrize("marks", [11, -1, 10.5])
def test_out_of_range_marks_leave_grade_untouched(submission, assignment, marks):
    q1, _ = _questions(assignment)
    grade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': 7}])

    with pytest.raises(InvalidMarks):
        regrade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': marks}])

    submission.refresh_from_db()
    assert submission.total_grade == 7
    assert AssignmentAnswer.objects.get(submission=submission, question=q1).points_awarded == 7


def test_invalid_marks_on_first_grading_write_nothing(submission, assignment):
    q1, q2 = _questions(assignment)

    with pytest.raises(InvalidMarks):
        grade_assignment(submission.pk, [
            {'question_id': q1.pk, 'marks_awarded': 4},
            {'question_id': q2.pk, 'marks_awarded': 25},
        ])

    submission.refresh_from_db()
    assert submission.status == SubmissionStatus.SUBMITTED
    assert not submission.answers.filter(points_awarded__isnull=False).exists()


def test_regrade_requires_graded_submission(submission, assignment):
    q1, _ = _questions(assignment)

    with pytest.raises(InvalidState):
        regrade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': 5}])


def test_regrade_keeps_overall_feedback_unless_given(submission, assignment):
    q1, _ = _questions(assignment)
    grade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': 6}], overall_feedback="Solid")

    regrade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': 8}])
    submission.refresh_from_db()
    assert submission.feedback == "Solid"

    regrade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': 8}], overall_feedback="Better")
    submission.refresh_from_db()
    assert submission.feedback == "Better"


def test_regrade_keeps_answer_feedback_unless_given(submission, assignment):
    q1, _ = _questions(assignment)
    grade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': 6, 'feedback': "Cite sources"}])

    regrade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': 7}])

    assert AssignmentAnswer.objects.get(submission=submission, question=q1).feedback == "Cite sources"


def test_regrade_of_unanswered_question_is_rejected(student, enrollment, assignment):
    q1, q2 = _questions(assignment)
    result = submit_assignment(student, assignment.pk, [{'question_id': q1.pk, 'text': "Only one"}])
    grade_assignment(result.submission_id, [{'question_id': q1.pk, 'marks_awarded': 6}])

    with pytest.raises(InvalidQuestion):
        regrade_assignment(result.submission_id, [
            {'question_id': q1.pk, 'marks_awarded': 9},
            {'question_id': q2.pk, 'marks_awarded': 9},
        ])

    assert AssignmentAnswer.objects.get(submission_id=result.submission_id, question=q1).points_awarded == 6
    assert not AssignmentAnswer.objects.filter(submission_id=result.submission_id, question=q2).exists()


def test_grading_question_of_another_assignment_is_rejected(submission, make_assignment):
    foreign = _questions(make_assignment(points=(5,)))[0]

    with pytest.raises(InvalidQuestion):
        grade_assignment(submission.pk, [{'question_id': foreign.pk, 'marks_awarded': 1}])


def test_grading_unknown_submission_is_not_found(db):
    with pytest.raises(NotFound):
        grade_assignment(999999, [])


def test_get_assignment_submission(student, other_student, submission, assignment):
    assert get_assignment_submission(student, assignment.pk).pk == submission.pk
    with pytest.raises(NotFound):
        get_assignment_submission(other_student, assignment.pk)


@pytest.mark.parametrize("marks", [float('nan'), float('inf'), Decimal('NaN'), "7", None])
def test_non_numeric_or_non_finite_marks_are_rejected(submission, assignment, marks):
    q1, _ = _questions(assignment)

    with pytest.raises(InvalidMarks):
        grade_assignment(submission.pk, [{'question_id': q1.pk, 'marks_awarded': marks}])

    submission.refresh_from_db()
    assert submission.status == SubmissionStatus.SUBMITTED
    assert submission.total_grade is None


def test_decimal_marks_are_accepted(submission, assignment):
    q1, q2 = _questions(assignment)

    result = grade_assignment(submission.pk, [
        {'question_id': q1.pk, 'marks_awarded': Decimal("7")},
        {'question_id': q2.pk, 'marks_awarded': 2.5},
    ])

    assert result.total_grade == 9.5
    assert result.percentage == 48


def test_storage_failure_on_submit_leaves_no_rows(monkeypatch, student, enrollment, assignment):
    q1, _ = _questions(assignment)

    def broken_bulk_create(*args, **kwargs):
        raise DatabaseError("disk full")

    monkeypatch.setattr(AssignmentAnswer.objects, "bulk_create", broken_bulk_create)

    with pytest.raises(StorageError):
        submit_assignment(student, assignment.pk, [{'question_id': q1.pk, 'text': "Lost"}])

    assert not AssignmentSubmission.objects.exists()
    assert not AssignmentAnswer.objects.exists()


def test_storage_failure_on_grading_leaves_submission_ungraded(monkeypatch, submission, assignment):
    q1, q2 = _questions(assignment)
    calls = []

    def failing_update_or_create(*args, **kwargs):
        calls.append(kwargs)
        if len(calls) == 2:
            raise DatabaseError("connection lost")
        return original(*args, **kwargs)

    original = AssignmentAnswer.objects.update_or_create
    monkeypatch.setattr(AssignmentAnswer.objects, "update_or_create", failing_update_or_create)

    with pytest.raises(StorageError):
        grade_assignment(submission.pk, [
            {'question_id': q1.pk, 'marks_awarded': 6},
            {'question_id': q2.pk, 'marks_awarded': 4},
        ])

    submission.refresh_from_db()
    assert submission.status == SubmissionStatus.SUBMITTED
    assert submission.total_grade is None
    assert not submission.answers.filter(points_awarded__isnull=False).exists()
