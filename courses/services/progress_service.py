"""
Progress aggregation.

Rolls per-user completion signals (lessons, quiz submissions, graded
assignments) up into ``CourseProgress`` and then into the owning series
``Enrollment``. Recomputation is best-effort: a missing course or enrollment
is logged and skipped so the triggering grade is never failed by it.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from courses.events import emit, lesson_completed
from courses.models import Course, CourseProgress, Enrollment, Lesson, LessonProgress
from grading.exceptions import InvalidState, NotFound
from grading.models import (
    Assignment, AssignmentSubmission, PublicationStatus, Quiz, QuizSubmission, SubmissionStatus,
)
from grading.utils import compute_percentage

from .enrollment_service import require_eligible

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def _completion_threshold():
    return getattr(settings, "PROGRESS_COMPLETION_THRESHOLD", 100)


def course_completion_counts(user, course):
    """
    Return ``(completed, total)`` completion items of a course for a user.

    Items are the course's lessons, its published quizzes (done once
    submitted) and its published assignments (done once graded).
    """
    live = [PublicationStatus.PUBLISHED, PublicationStatus.LOCKED]

    total = (
        Lesson.objects.filter(course=course).count()
        + Quiz.objects.filter(course=course, publication_status__in=live).count()
        + Assignment.objects.filter(course=course, publication_status__in=live).count()
    )
    completed = (
        LessonProgress.objects.filter(user=user, lesson__course=course, is_completed=True).count()
        + QuizSubmission.objects.filter(
            student=user,
            quiz__course=course,
            quiz__publication_status__in=live,
            status__in=[SubmissionStatus.SUBMITTED, SubmissionStatus.GRADED],
        ).count()
        + AssignmentSubmission.objects.filter(
            student=user,
            assignment__course=course,
            assignment__publication_status__in=live,
            status=SubmissionStatus.GRADED,
        ).count()
    )
    return completed, total


def recompute_course_progress(user, course_id, allow_decrease=False):
    """
    Recompute one user's ``CourseProgress`` for a course.

    The percentage never goes down unless ``allow_decrease`` is set (an
    administrative re-grade). A COMPLETED row is left untouched.
    """
    try:
        course = Course.objects.select_related('series').get(pk=course_id)
    except Course.DoesNotExist:
        logger.warning("Skipping course progress: course %s not found", course_id)
        return None

    completed, total = course_completion_counts(user, course)
    if total == 0:
        logger.warning("Skipping course progress: course %s has no completion items", course_id)
        return None

    percentage = Decimal(compute_percentage(completed, total))

    with transaction.atomic():
        progress, created = CourseProgress.objects.select_for_update().get_or_create(
            user=user,
            course=course,
            defaults={'series': course.series},
        )
        if progress.status == CourseProgress.Status.COMPLETED:
            return progress

        if not allow_decrease and percentage < progress.completion_percentage:
            percentage = progress.completion_percentage

        progress.completion_percentage = percentage
        if percentage >= _completion_threshold():
            progress.status = CourseProgress.Status.COMPLETED
            progress.is_completed = True
            progress.completed_at = timezone.now()
        elif percentage > 0:
            progress.status = CourseProgress.Status.IN_PROGRESS
        else:
            progress.status = CourseProgress.Status.PENDING
        progress.save()

    logger.info(
        "Course progress for user %s in course %s: %s/%s items (%s%%) - %s",
        user.pk, course_id, completed, total, progress.completion_percentage, progress.status,
    )
    return progress


def recompute_enrollment_progress(user, series_id):
    """
    Recompute the series enrollment as the mean of its courses' completion
    percentages. Courses without a progress row count as 0. The enrollment
    flips to COMPLETED once every course of the series is COMPLETED.
    """
    try:
        enrollment = Enrollment.objects.get(user=user, series_id=series_id)
    except Enrollment.DoesNotExist:
        logger.warning("Skipping enrollment progress: user %s has no enrollment in series %s", user.pk, series_id)
        return None

    if not enrollment.is_eligible:
        logger.warning("Skipping enrollment progress: enrollment %s is %s", enrollment.pk, enrollment.status)
        return None

    course_ids = list(Course.objects.filter(series_id=series_id).values_list('id', flat=True))

    with transaction.atomic():
        enrollment = Enrollment.objects.select_for_update().get(pk=enrollment.pk)
        rows = {
            row.course_id: row
            for row in CourseProgress.objects.select_for_update().filter(user=user, course_id__in=course_ids)
        }

        if course_ids:
            total = sum((rows[cid].completion_percentage if cid in rows else Decimal(0)) for cid in course_ids)
            mean = (Decimal(total) / len(course_ids)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
        else:
            mean = Decimal(0)

        all_completed = bool(course_ids) and all(
            cid in rows and rows[cid].status == CourseProgress.Status.COMPLETED for cid in course_ids
        )

        enrollment.progress_percentage = mean
        update_fields = ['progress_percentage', 'updated_at']
        if all_completed and enrollment.status != Enrollment.Status.COMPLETED:
            enrollment.status = Enrollment.Status.COMPLETED
            enrollment.completed_at = timezone.now()
            update_fields += ['status', 'completed_at']
            logger.info("Enrollment %s completed: all %s courses done", enrollment.pk, len(course_ids))
        enrollment.save(update_fields=update_fields)

    return enrollment


def on_progress_event(user, course_id=None, series_id=None, allow_decrease=False):
    """Entry point for progress events: course rollup first, then the series."""
    if course_id is not None:
        recompute_course_progress(user, course_id, allow_decrease=allow_decrease)
        if series_id is None:
            series_id = Course.objects.filter(pk=course_id).values_list('series_id', flat=True).first()

    if series_id is None:
        logger.warning("Skipping enrollment progress: no series for course %s", course_id)
        return None
    return recompute_enrollment_progress(user, series_id)


def is_lesson_accessible(user, lesson):
    """
    Lessons of a course unlock in order: the first one is always open, any
    other one once the lesson right before it is completed.
    """
    previous_lesson = Lesson.objects.filter(course_id=lesson.course_id).filter(
        Q(position__lt=lesson.position) | Q(position=lesson.position, id__lt=lesson.id)
    ).order_by('-position', '-id').first()
    if previous_lesson is None:
        return True
    return LessonProgress.objects.filter(user=user, lesson=previous_lesson, is_completed=True).exists()


def mark_lesson_completed(user, lesson_id):
    """
    Mark a lesson as completed for the user and announce it to the
    aggregator. Completing an already completed lesson is a no-op write.
    """
    try:
        lesson = Lesson.objects.select_related('course').get(pk=lesson_id)
    except Lesson.DoesNotExist:
        raise NotFound("Lesson not found.")

    require_eligible(user, lesson.course.series_id)

    if not is_lesson_accessible(user, lesson):
        logger.warning("User %s tried to complete locked lesson %s", user.pk, lesson.pk)
        raise InvalidState("Complete the previous lesson of this course first.")

    progress, created = LessonProgress.objects.get_or_create(user=user, lesson=lesson)
    if not progress.is_completed:
        progress.is_completed = True
        progress.completed_at = timezone.now()
        progress.save(update_fields=['is_completed', 'completed_at'])

    emit(lesson_completed, sender=Lesson, user=user, lesson=lesson)
    return progress


def mark_course_completed(user, course_id):
    """Administrative override: set the course to 100% / COMPLETED and roll up."""
    try:
        course = Course.objects.select_related('series').get(pk=course_id)
    except Course.DoesNotExist:
        raise NotFound("Course not found.")

    with transaction.atomic():
        progress, created = CourseProgress.objects.select_for_update().get_or_create(
            user=user,
            course=course,
            defaults={'series': course.series},
        )
        if progress.status != CourseProgress.Status.COMPLETED:
            progress.status = CourseProgress.Status.COMPLETED
            progress.is_completed = True
            progress.completion_percentage = Decimal(100)
            progress.completed_at = timezone.now()
            progress.save()

    logger.info("Course %s marked completed for user %s", course_id, user.pk)
    recompute_enrollment_progress(user, course.series_id)
    return progress


def get_series_progress(user, series_id):
    """Read model: every course of the series with the user's progress."""
    try:
        enrollment = Enrollment.objects.select_related('series').get(user=user, series_id=series_id)
    except Enrollment.DoesNotExist:
        raise NotFound("Enrollment not found.")

    rows = {
        row.course_id: row
        for row in CourseProgress.objects.filter(user=user, series_id=series_id)
    }
    courses = []
    for course in Course.objects.filter(series_id=series_id):
        row = rows.get(course.id)
        courses.append({
            'course_id': course.id,
            'course_title': course.title,
            'status': row.status if row else CourseProgress.Status.PENDING,
            'completion_percentage': float(row.completion_percentage) if row else 0.0,
            'is_completed': row.is_completed if row else False,
            'started_at': row.started_at if row else None,
            'completed_at': row.completed_at if row else None,
        })

    return {
        'series_id': enrollment.series_id,
        'series_title': enrollment.series.title,
        'enrollment_status': enrollment.status,
        'progress_percentage': float(enrollment.progress_percentage),
        'completed_at': enrollment.completed_at,
        'courses': courses,
    }
