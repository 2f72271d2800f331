"""Validation shared by the graders. Runs before any write."""

import math
from decimal import Decimal
from numbers import Real

from grading.exceptions import InvalidMarks, InvalidQuestion


def _question_id(answer):
    question_id = answer.get('question_id')
    try:
        return int(question_id)
    except (TypeError, ValueError):
        raise InvalidQuestion(f"Invalid question id {question_id!r}.")


def validate_question_ids(answers, rules, allowed=None):
    """
    Check that every answer targets a distinct question of the assessment.

    ``rules`` maps question id to its gradable item. ``allowed`` optionally
    narrows the accepted ids further (e.g. questions already answered).
    Returns the answers' question ids in input order.
    """
    seen = set()
    question_ids = []
    for answer in answers:
        question_id = _question_id(answer)
        if question_id not in rules:
            raise InvalidQuestion(f"Question {question_id} does not belong to this assessment.")
        if allowed is not None and question_id not in allowed:
            raise InvalidQuestion(f"Question {question_id} has no answer to update.")
        if question_id in seen:
            raise InvalidQuestion(f"Question {question_id} appears more than once.")
        seen.add(question_id)
        question_ids.append(question_id)
    return question_ids


def validate_marks(answers, rules):
    """Every ``marks_awarded`` must lie within [0, question max points]."""
    for answer in answers:
        question_id = _question_id(answer)
        marks = answer.get('marks_awarded')
        if isinstance(marks, bool) or not isinstance(marks, (Real, Decimal)):
            raise InvalidMarks(f"Marks for question {question_id} must be a number.")
        finite = marks.is_finite() if isinstance(marks, Decimal) else math.isfinite(marks)
        if not finite:
            raise InvalidMarks(f"Marks for question {question_id} must be a finite number.")
        max_points = rules[question_id].max_points
        if marks < 0 or marks > max_points:
            raise InvalidMarks(
                f"Marks {marks} for question {question_id} must be between 0 and {max_points}."
            )
