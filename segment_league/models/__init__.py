"""Database model exports."""

from .activity import Activity, Result, SegmentEffort
from .participant import Participant
from .season import Season, Week
from .segment import Segment
from .credential import ParticipantToken

__all__ = [
    "Activity",
    "Participant",
    "ParticipantToken",
    "Result",
    "Season",
    "Segment",
    "SegmentEffort",
    "Week",
]
