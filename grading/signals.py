"""
Progress events emitted by the graders.

Receivers live in ``courses.signals``. The graders emit only after their
transaction has committed.
"""

from django.dispatch import Signal

from courses.events import emit  # noqa: F401

# kwargs: user, quiz, submission
quiz_submitted = Signal()
# kwargs: user, assignment, submission, regrade
assignment_graded = Signal()
