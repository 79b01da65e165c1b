from grease import db
from grease.errors import NotFoundError
from grease.models.member import ActiveSemester


class Attendance(db.Model):
    """A member's attendance record for one event."""
    __tablename__ = 'attendance'

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey('members.id', ondelete='CASCADE'), nullable=False)
    event_id = db.Column(db.Integer, db.ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    should_attend = db.Column(db.Boolean, nullable=False, default=True)
    did_attend = db.Column(db.Boolean, nullable=False, default=False)
    confirmed = db.Column(db.Boolean, nullable=False, default=False)
    minutes_late = db.Column(db.Integer, nullable=False, default=0)

    # Unique constraint: one attendance record per member per event
    __table_args__ = (
        db.UniqueConstraint('event_id', 'member_id', name='unique_attendance'),
    )

    def __repr__(self):
        return f'<Attendance event={self.event_id} member={self.member_id}>'

    @classmethod
    def create_for_new_event(cls, event):
        """Add a row for every member active in the event's semester.

        Does not commit; the caller owns the transaction. Returns the
        number of rows added.
        """
        active = ActiveSemester.query.filter_by(semester=event.semester).all()
        for enrollment in active:
            db.session.add(cls(
                member_id=enrollment.member_id,
                event_id=event.id,
                should_attend=event.default_attend,
            ))
        return len(active)

    @classmethod
    def load(cls, member, event_id):
        attendance = cls.query.filter_by(member_id=member.id, event_id=event_id).first()
        if attendance is None:
            raise NotFoundError(f'{member.email} has no attendance for event {event_id}.')
        return attendance

    def to_json(self):
        return {
            'member': self.member.email if self.member else None,
            'event': self.event_id,
            'should_attend': self.should_attend,
            'did_attend': self.did_attend,
            'confirmed': self.confirmed,
            'minutes_late': self.minutes_late,
        }
