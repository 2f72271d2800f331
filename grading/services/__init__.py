# grading/services/__init__.py
from .results import SubmissionResult
from .quiz_service import get_quiz_submission, submit_quiz
from .assignment_service import (
    get_assignment_submission,
    grade_assignment,
    regrade_assignment,
    submit_assignment,
)

__all__ = [
    'SubmissionResult',
    'submit_quiz',
    'get_quiz_submission',
    'submit_assignment',
    'get_assignment_submission',
    'grade_assignment',
    'regrade_assignment',
]
