"""
Progress events.

Grading and lesson services announce completion-relevant changes through
these signals; ``courses.signals`` connects them to the progress
aggregator. Dispatch goes through :func:`emit`, which uses ``send_robust``
so a failing receiver is logged and never fails the caller.
"""

import logging

from django.dispatch import Signal

logger = logging.getLogger(__name__)

# kwargs: user, lesson
lesson_completed = Signal()


def emit(signal, sender, **kwargs):
    for receiver, result in signal.send_robust(sender=sender, **kwargs):
        if isinstance(result, Exception):
            logger.error(
                "Progress receiver %r failed for %s: %s",
                receiver, sender.__name__, result,
                exc_info=(type(result), result, result.__traceback__),
            )
