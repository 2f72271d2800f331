"""
Assignment hand-in and human grading.

First grading and re-grading share one validation core but differ in how
the total is computed: a first grading totals only the marks sent in that
call, a re-grade totals every answer attached to the submission.
"""

import logging

from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Sum
from django.utils import timezone

from courses.services.enrollment_service import require_eligible
from grading.exceptions import AlreadySubmitted, InvalidState, NotFound, StorageError
from grading.models import Assignment, AssignmentAnswer, AssignmentSubmission, SubmissionStatus
from grading.rules import items_by_question, resolve_assignment_rules, total_possible
from grading.signals import assignment_graded, emit

from .results import SubmissionResult
from .validation import validate_marks, validate_question_ids

logger = logging.getLogger(__name__)


def submit_assignment(student, assignment_id, answers):
    """
    Record a student's free-text answers for an assignment.
    answers: list of dicts with 'question_id' and optionally 'text'.
    """
    try:
        assignment = Assignment.objects.get(pk=assignment_id)
    except Assignment.DoesNotExist:
        raise NotFound("Assignment not found.")

    require_eligible(student, assignment.series_id)

    if AssignmentSubmission.objects.filter(assignment=assignment, student=student).exists():
        logger.warning("Duplicate assignment submission by user %s for assignment %s", student.pk, assignment.pk)
        raise AlreadySubmitted("Assignment already submitted.")

    items = resolve_assignment_rules(assignment.pk)
    question_ids = validate_question_ids(answers, items_by_question(items))

    now = timezone.now()
    try:
        with transaction.atomic():
            submission = AssignmentSubmission.objects.create(
                assignment=assignment,
                student=student,
                status=SubmissionStatus.SUBMITTED,
                submitted_at=now,
                is_late=bool(assignment.due_at and now > assignment.due_at),
            )
            AssignmentAnswer.objects.bulk_create([
                AssignmentAnswer(
                    submission=submission,
                    question_id=question_id,
                    answer_text=answer.get('text'),
                )
                for question_id, answer in zip(question_ids, answers)
            ])
    except IntegrityError:
        logger.warning("Concurrent assignment submission by user %s for assignment %s", student.pk, assignment.pk)
        raise AlreadySubmitted("Assignment already submitted.")
    except DatabaseError as exc:
        logger.exception("Failed to store assignment submission for user %s", student.pk)
        raise StorageError() from exc

    logger.info("Assignment %s submitted by user %s", assignment.pk, student.pk)
    return SubmissionResult.from_submission(submission, total_possible(items))


def _get_submission(submission_id):
    try:
        return AssignmentSubmission.objects.select_related('assignment', 'student').get(pk=submission_id)
    except AssignmentSubmission.DoesNotExist:
        raise NotFound("Submission not found.")


def grade_assignment(submission_id, answers, overall_feedback=None, grader=None):
    """
    Grade a submission for the first time.

    answers: list of dicts with 'question_id', 'marks_awarded' and
    optionally 'feedback'. Each answer row is created if missing or
    overwritten. The total is the sum of this call's marks only.
    """
    submission = _get_submission(submission_id)
    items = resolve_assignment_rules(submission.assignment_id)
    rules = items_by_question(items)
    question_ids = validate_question_ids(answers, rules)
    validate_marks(answers, rules)

    possible = total_possible(items)
    try:
        with transaction.atomic():
            submission = AssignmentSubmission.objects.select_for_update().get(pk=submission.pk)
            for question_id, answer in zip(question_ids, answers):
                AssignmentAnswer.objects.update_or_create(
                    submission=submission,
                    question_id=question_id,
                    defaults={
                        'points_awarded': answer['marks_awarded'],
                        'feedback': answer.get('feedback'),
                    },
                )
            # TODO: decide whether a first grading should also total every answer row, as regrade_assignment does
            submission.apply_total(sum(float(answer['marks_awarded']) for answer in answers), possible)
            submission.feedback = overall_feedback
            submission.status = SubmissionStatus.GRADED
            submission.graded_at = timezone.now()
            submission.graded_by = grader
            submission.save()
    except DatabaseError as exc:
        logger.exception("Failed to grade assignment submission %s", submission_id)
        raise StorageError() from exc

    logger.info(
        "Assignment submission %s graded: %s/%s (%s%%)",
        submission.pk, submission.total_grade, possible, submission.percentage,
    )
    emit(
        assignment_graded, sender=AssignmentSubmission,
        user=submission.student, assignment=submission.assignment, submission=submission, regrade=False,
    )
    return SubmissionResult.from_submission(submission, possible)


def regrade_assignment(submission_id, answers, overall_feedback=None, grader=None):
    """
    Update marks on an already graded submission.

    Only existing answer rows can be changed. The total is recomputed over
    every answer attached to the submission, so answers left out of this
    call keep counting. Overall feedback is kept unless a new one is given.
    """
    submission = _get_submission(submission_id)
    if submission.status != SubmissionStatus.GRADED:
        raise InvalidState("Submission must be graded before it can be re-graded.")

    items = resolve_assignment_rules(submission.assignment_id)
    rules = items_by_question(items)
    answered = set(submission.answers.values_list('question_id', flat=True))
    question_ids = validate_question_ids(answers, rules, allowed=answered)
    validate_marks(answers, rules)

    possible = total_possible(items)
    try:
        with transaction.atomic():
            submission = AssignmentSubmission.objects.select_for_update().get(pk=submission.pk)
            if submission.status != SubmissionStatus.GRADED:
                raise InvalidState("Submission must be graded before it can be re-graded.")
            for question_id, answer in zip(question_ids, answers):
                updates = {'points_awarded': answer['marks_awarded']}
                if answer.get('feedback') is not None:
                    updates['feedback'] = answer['feedback']
                AssignmentAnswer.objects.filter(submission=submission, question_id=question_id).update(
                    updated_at=timezone.now(), **updates
                )
            total = submission.answers.aggregate(total=Sum('points_awarded'))['total'] or 0
            submission.apply_total(total, possible)
            if overall_feedback is not None:
                submission.feedback = overall_feedback
            submission.graded_at = timezone.now()
            if grader is not None:
                submission.graded_by = grader
            submission.save()
    except DatabaseError as exc:
        logger.exception("Failed to re-grade assignment submission %s", submission_id)
        raise StorageError() from exc

    logger.info(
        "Assignment submission %s re-graded: %s/%s (%s%%)",
        submission.pk, submission.total_grade, possible, submission.percentage,
    )
    emit(
        assignment_graded, sender=AssignmentSubmission,
        user=submission.student, assignment=submission.assignment, submission=submission, regrade=True,
    )
    return SubmissionResult.from_submission(submission, possible)


def get_assignment_submission(student, assignment_id):
    try:
        return AssignmentSubmission.objects.select_related('assignment').prefetch_related(
            'answers__question'
        ).get(assignment_id=assignment_id, student=student)
    except AssignmentSubmission.DoesNotExist:
        raise NotFound("Submission not found.")
