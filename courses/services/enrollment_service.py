import logging

from courses.models import Enrollment
from grading.exceptions import NotEligible

logger = logging.getLogger(__name__)


def is_eligible(user, series_id):
    """
    True when the user holds an enrollment that allows submitting work in the
    series: status ACTIVE or COMPLETED with the payment settled.
    """
    return Enrollment.objects.filter(
        user=user,
        series_id=series_id,
        status__in=Enrollment.ELIGIBLE_STATUSES,
        payment_status='completed',
    ).exists()


def require_eligible(user, series_id):
    if not is_eligible(user, series_id):
        logger.warning("User %s is not eligible for series %s", getattr(user, "pk", user), series_id)
        raise NotEligible("You are not enrolled in this series.")


def is_series_complete(user, series_id):
    """
    Certificate gate: every course of the series is completed and the
    enrollment has been flipped to COMPLETED by the progress aggregator.
    """
    return Enrollment.objects.filter(
        user=user,
        series_id=series_id,
        status=Enrollment.Status.COMPLETED,
    ).exists()
