"""
Grading rules resolver.

Rules are read from the database on every call so that grading always uses
the live question configuration: editing a question's points before a
submission is graded changes that grade.
"""

from dataclasses import dataclass
from typing import FrozenSet, List, Optional

from .exceptions import NotFound
from .models import Assignment, AssignmentQuestion, Quiz, QuizOption, QuizQuestion


@dataclass(frozen=True)
class GradableItem:
    question_id: int
    max_points: int
    position: int
    # Quiz questions only; None for assignment questions.
    correct_option_ids: Optional[FrozenSet[int]] = None
    option_ids: Optional[FrozenSet[int]] = None


def total_possible(items):
    return sum(item.max_points for item in items)


def items_by_question(items):
    return {item.question_id: item for item in items}


def resolve_quiz_rules(quiz_id) -> List[GradableItem]:
    """Ordered gradable items of a quiz, with correct option ids per question."""
    if not Quiz.objects.filter(pk=quiz_id).exists():
        raise NotFound("Quiz not found.")

    questions = list(
        QuizQuestion.objects.filter(quiz_id=quiz_id)
        .order_by('position', 'id')
        .values_list('id', 'points', 'position')
    )
    options = {}
    correct = {}
    for question_id, option_id, is_correct in QuizOption.objects.filter(
        question__quiz_id=quiz_id
    ).values_list('question_id', 'id', 'is_correct'):
        options.setdefault(question_id, set()).add(option_id)
        if is_correct:
            correct.setdefault(question_id, set()).add(option_id)

    return [
        GradableItem(
            question_id=question_id,
            max_points=points,
            position=position,
            correct_option_ids=frozenset(correct.get(question_id, ())),
            option_ids=frozenset(options.get(question_id, ())),
        )
        for question_id, points, position in questions
    ]


def resolve_assignment_rules(assignment_id) -> List[GradableItem]:
    """Ordered gradable items of an assignment."""
    if not Assignment.objects.filter(pk=assignment_id).exists():
        raise NotFound("Assignment not found.")

    return [
        GradableItem(question_id=question_id, max_points=points, position=position)
        for question_id, points, position in AssignmentQuestion.objects.filter(
            assignment_id=assignment_id
        ).order_by('position', 'id').values_list('id', 'points', 'position')
    ]
