import enum
from datetime import datetime
from grease import db


class AbsenceRequestState(str, enum.Enum):
    PENDING = 'pending'
    APPROVED = 'approved'
    DENIED = 'denied'


class AbsenceRequest(db.Model):
    """A member asking to be excused from an event."""
    __tablename__ = 'absence_requests'

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey('members.id', ondelete='CASCADE'), nullable=False)
    event_id = db.Column(db.Integer, db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    time = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    reason = db.Column(db.String(500), nullable=False)
    state = db.Column(db.String(10), nullable=False, default=AbsenceRequestState.PENDING.value)

    __table_args__ = (
        db.UniqueConstraint('event_id', 'member_id', name='unique_absence_request'),
    )

    def __repr__(self):
        return f'<AbsenceRequest event={self.event_id} member={self.member_id} state={self.state}>'

    @property
    def approved(self):
        return self.state == AbsenceRequestState.APPROVED
