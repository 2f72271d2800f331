"""Connect progress events to the aggregator."""

from django.dispatch import receiver

from courses.events import lesson_completed
from courses.services.progress_service import on_progress_event
from grading.signals import assignment_graded, quiz_submitted


@receiver(quiz_submitted)
def _quiz_submitted_handler(sender, user, quiz, submission, **kwargs):
    on_progress_event(user, course_id=quiz.course_id, series_id=quiz.series_id)


@receiver(assignment_graded)
def _assignment_graded_handler(sender, user, assignment, submission, regrade=False, **kwargs):
    on_progress_event(
        user,
        course_id=assignment.course_id,
        series_id=assignment.series_id,
        allow_decrease=regrade,
    )


@receiver(lesson_completed)
def _lesson_completed_handler(sender, user, lesson, **kwargs):
    on_progress_event(user, course_id=lesson.course_id)
