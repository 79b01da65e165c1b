# Import all models here so they're registered with SQLAlchemy
from grease.models.member import Member, ActiveSemester
from grease.models.semester import Semester
from grease.models.uniform import Uniform
from grease.models.event import Event, Gig, EventWithGig, PlainEvent, GigEvent, compose
from grease.models.attendance import Attendance
from grease.models.absence_request import AbsenceRequest, AbsenceRequestState
from grease.models.gig_request import GigRequest, GigRequestStatus

__all__ = [
    'Member', 'ActiveSemester', 'Semester', 'Uniform', 'Event', 'Gig', 'EventWithGig',
    'PlainEvent', 'GigEvent', 'compose', 'Attendance', 'AbsenceRequest', 'AbsenceRequestState',
    'GigRequest', 'GigRequestStatus',
]
