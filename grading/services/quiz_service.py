import logging

from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from courses.services.enrollment_service import require_eligible
from grading.exceptions import AlreadySubmitted, NotFound, StorageError
from grading.models import Quiz, QuizAnswer, QuizSubmission, SubmissionStatus
from grading.rules import items_by_question, resolve_quiz_rules, total_possible
from grading.signals import emit, quiz_submitted

from .results import SubmissionResult
from .validation import validate_question_ids

logger = logging.getLogger(__name__)


def evaluate_answer(item, option_id):
    """
    Grade one multiple-choice answer.
    Returns: (is_correct, points_awarded, option_id_to_store)

    An option that is not one of the question's options is stored as no
    selection and is never correct.
    """
    if option_id is None or option_id not in item.option_ids:
        return False, 0, None
    if option_id in item.correct_option_ids:
        return True, item.max_points, option_id
    return False, 0, option_id


def submit_quiz(student, quiz_id, answers):
    """
    Auto-grade and record a student's single quiz submission.

    answers: list of dicts with 'question_id' and optionally 'option_id'
    and 'text'. Unanswered questions count as zero against the full set of
    questions. A student gets exactly one submission per quiz.
    """
    try:
        quiz = Quiz.objects.get(pk=quiz_id)
    except Quiz.DoesNotExist:
        raise NotFound("Quiz not found.")

    require_eligible(student, quiz.series_id)

    if QuizSubmission.objects.filter(quiz=quiz, student=student).exists():
        logger.warning("Duplicate quiz submission by user %s for quiz %s", student.pk, quiz.pk)
        raise AlreadySubmitted("Quiz already submitted.")

    items = resolve_quiz_rules(quiz.pk)
    rules = items_by_question(items)
    question_ids = validate_question_ids(answers, rules)

    graded = []
    earned = 0
    for question_id, answer in zip(question_ids, answers):
        option_id = answer.get('option_id')
        if option_id is not None:
            option_id = int(option_id)
        is_correct, points, stored_option_id = evaluate_answer(rules[question_id], option_id)
        earned += points
        graded.append(QuizAnswer(
            question_id=question_id,
            selected_option_id=stored_option_id,
            answer_text=answer.get('text'),
            is_correct=is_correct,
            points_awarded=points,
        ))
    possible = total_possible(items)

    now = timezone.now()
    try:
        with transaction.atomic():
            submission = QuizSubmission(
                quiz=quiz,
                student=student,
                status=SubmissionStatus.SUBMITTED,
                submitted_at=now,
                is_late=bool(quiz.due_at and now > quiz.due_at),
            )
            submission.apply_total(earned, possible)
            submission.save()
            for answer in graded:
                answer.submission = submission
            QuizAnswer.objects.bulk_create(graded)
    except IntegrityError:
        # Lost the race against a concurrent submit for the same pair.
        logger.warning("Concurrent quiz submission by user %s for quiz %s", student.pk, quiz.pk)
        raise AlreadySubmitted("Quiz already submitted.")
    except DatabaseError as exc:
        logger.exception("Failed to store quiz submission for user %s, quiz %s", student.pk, quiz.pk)
        raise StorageError() from exc

    logger.info(
        "Quiz %s submitted by user %s: %s/%s (%s%%)",
        quiz.pk, student.pk, earned, possible, submission.percentage,
    )
    emit(quiz_submitted, sender=QuizSubmission, user=student, quiz=quiz, submission=submission)
    return SubmissionResult.from_submission(submission, possible)


def get_quiz_submission(student, quiz_id):
    try:
        return QuizSubmission.objects.select_related('quiz').prefetch_related(
            'answers__question'
        ).get(quiz_id=quiz_id, student=student)
    except QuizSubmission.DoesNotExist:
        raise NotFound("Submission not found.")
