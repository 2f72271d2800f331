# courses/services/__init__.py
from .enrollment_service import *
from .progress_service import *
from .certificate_service import *

__all__ = [
    'enrollment_service',
    'progress_service',
    'certificate_service',
]
