"""Project profile detection.

Re-exports ``ProjectProfile``, ``ProjectType`` and ``detect_project`` so
callers can write ``from ratel.profile import detect_project``.
"""

from ratel.profile.detector import MARKERS, ProjectMarker, detect_project
from ratel.profile.models import ProjectProfile, ProjectType

__all__ = [
    "MARKERS",
    "ProjectMarker",
    "ProjectProfile",
    "ProjectType",
    "detect_project",
]
