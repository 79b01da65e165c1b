from datetime import datetime, timedelta
from grease import db
from grease.models.attendance import Attendance
from grease.models.uniform import Uniform


def _iso(value):
    return value.isoformat() if value is not None else None


class Event(db.Model):
    """Anything members are expected to show up to: rehearsals, sectionals, gigs."""
    __tablename__ = 'events'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False)
    semester = db.Column(db.String(32), db.ForeignKey('semesters.name', ondelete='CASCADE'),
                         nullable=False, index=True)
    event_type = db.Column('type', db.String(32), nullable=False)
    call_time = db.Column(db.DateTime, nullable=False, index=True)
    release_time = db.Column(db.DateTime, nullable=True)
    points = db.Column(db.Integer, nullable=False)
    comments = db.Column(db.Text, nullable=True)
    location = db.Column(db.String(255), nullable=True)
    gig_count = db.Column(db.Boolean, nullable=False, default=True)
    default_attend = db.Column(db.Boolean, nullable=False, default=True)
    section = db.Column(db.String(20), nullable=True)

    # Relationships
    gig = db.relationship('Gig', backref='event', uselist=False, cascade='all, delete-orphan')
    attendances = db.relationship('Attendance', backref='event', lazy='dynamic',
                                  cascade='all, delete-orphan')
    absence_requests = db.relationship('AbsenceRequest', backref='event', lazy='dynamic',
                                       cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Event {self.id} {self.name}>'

    def minimal(self):
        return {'id': self.id, 'name': self.name}

    def week_bounds(self):
        """Sunday-to-Sunday window around the call time (time of day kept)."""
        days_since_sunday = (self.call_time.weekday() + 1) % 7
        last_sunday = self.call_time - timedelta(days=days_since_sunday)
        return last_sunday, last_sunday + timedelta(days=7)

    def went_to_event_type_during_week_of(self, semester_events_with_attendance,
                                          semester_absence_requests, event_type, now=None):
        """
        Check whether a member made it to an event of the given type this week.

        Args:
            semester_events_with_attendance: (Event, Attendance) pairs for one member
            semester_absence_requests: that member's absence requests
            event_type: the type to look for, e.g. 'sectional'
            now: current time, defaults to the local clock

        Returns:
            None if no other event of that type has finished this week,
            otherwise True if any of them was attended or excused.
        """
        last_sunday, next_sunday = self.week_bounds()
        cutoff = min(next_sunday, now or datetime.now())

        candidates = [
            (event.id, attendance)
            for event, attendance in semester_events_with_attendance
            if event.id != self.id
            and event.semester == self.semester
            and event.call_time > last_sunday
            and (event.release_time or event.call_time) < cutoff
            and event.event_type == event_type
        ]
        if not candidates:
            return None

        return any(
            attendance.did_attend or any(
                request.event_id == event_id
                and request.member_id == attendance.member_id
                and request.approved
                for request in semester_absence_requests
            )
            for event_id, attendance in candidates
        )

    def load_sectionals_the_week_of(self):
        """Sectionals in this event's semester during the same week."""
        last_sunday, next_sunday = self.week_bounds()
        return Event.query.filter(
            Event.event_type == 'sectional',
            Event.semester == self.semester,
            Event.call_time > last_sunday,
            Event.call_time < next_sunday,
        ).order_by(Event.call_time.asc()).all()


class Gig(db.Model):
    """Performance details for an event that is a gig."""
    __tablename__ = 'gigs'

    event_id = db.Column('event', db.Integer, db.ForeignKey('events.id', ondelete='CASCADE'),
                         primary_key=True)
    performance_time = db.Column(db.DateTime, nullable=False)
    uniform_id = db.Column('uniform', db.Integer, db.ForeignKey('uniforms.id', ondelete='CASCADE'),
                           nullable=False)
    contact_name = db.Column(db.String(50), nullable=True)
    contact_email = db.Column(db.String(50), nullable=True)
    contact_phone = db.Column(db.String(16), nullable=True)
    price = db.Column(db.Integer, nullable=True)
    public = db.Column(db.Boolean, nullable=False, default=False)
    summary = db.Column(db.Text, nullable=True)
    description = db.Column(db.Text, nullable=True)

    uniform = db.relationship('Uniform')

    def __repr__(self):
        return f'<Gig event={self.event_id}>'


GIG_FIELDS = (
    'performance_time', 'uniform', 'contact_name', 'contact_email', 'contact_phone',
    'price', 'public', 'summary', 'description',
)


class EventWithGig:
    """An event as callers see it. Either a PlainEvent or a GigEvent."""
    gig = None

    def __init__(self, event):
        self.event = event

    @property
    def id(self):
        return self.event.id

    @property
    def is_gig(self):
        return self.gig is not None

    def gig_json(self):
        return dict.fromkeys(GIG_FIELDS)

    def to_json(self):
        event = self.event
        data = {
            'id': event.id,
            'name': event.name,
            'semester': event.semester,
            'type': event.event_type,
            'call_time': _iso(event.call_time),
            'release_time': _iso(event.release_time),
            'points': event.points,
            'comments': event.comments,
            'location': event.location,
            'gig_count': event.gig_count,
            'default_attend': event.default_attend,
            'section': event.section,
        }
        data.update(self.gig_json())
        return data

    def to_json_full(self, member):
        """to_json with the uniform resolved and the member's attendance attached."""
        data = self.to_json()
        data['uniform'] = Uniform.load(self.gig.uniform_id).to_json() if self.gig else None
        data['attendance'] = Attendance.load(member, self.event.id).to_json()
        return data


class PlainEvent(EventWithGig):
    pass


class GigEvent(EventWithGig):

    def __init__(self, event, gig):
        super().__init__(event)
        self.gig = gig

    def gig_json(self):
        gig = self.gig
        return {
            'performance_time': _iso(gig.performance_time),
            'uniform': gig.uniform_id,
            'contact_name': gig.contact_name,
            'contact_email': gig.contact_email,
            'contact_phone': gig.contact_phone,
            'price': gig.price,
            'public': gig.public,
            'summary': gig.summary,
            'description': gig.description,
        }

    def to_public_json(self):
        """What the public calendar shows. No contact details or price."""
        return {
            'id': self.event.id,
            'name': self.event.name,
            'performance_time': _iso(self.gig.performance_time),
            'location': self.event.location,
            'summary': self.gig.summary,
            'description': self.gig.description,
        }


def compose(event, gig):
    """Decode one row of the event/gig left join.

    A gig row only counts when performance_time, uniform and public are
    all set; anything less presents as a plain event.
    """
    if gig is not None and all(
        value is not None for value in (gig.performance_time, gig.uniform_id, gig.public)
    ):
        return GigEvent(event, gig)
    return PlainEvent(event)
