"""
Errors raised by the grading and progress services.

Every error carries a stable ``kind`` and the HTTP status the API answers
with, so views can translate them without knowing each class.
"""

from rest_framework import status


class GradingError(Exception):
    kind = "GradingError"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Grading request failed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def as_dict(self):
        return {"success": False, "error": self.kind, "message": self.message}


class NotFound(GradingError):
    kind = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found."


class AlreadySubmitted(GradingError):
    kind = "AlreadySubmitted"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Assessment already submitted."


class InvalidQuestion(GradingError):
    kind = "InvalidQuestion"
    default_message = "Invalid question for this assessment."


class InvalidMarks(GradingError):
    kind = "InvalidMarks"
    default_message = "Marks must be between 0 and the question's points."


class InvalidState(GradingError):
    kind = "InvalidState"
    status_code = status.HTTP_409_CONFLICT
    default_message = "Submission is not in a state that allows this operation."


class NotEligible(GradingError):
    kind = "NotEligible"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "You are not enrolled in this series."


class StorageError(GradingError):
    kind = "StorageError"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Storage failure, nothing was saved."
