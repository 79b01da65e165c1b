import enum
from datetime import datetime
from sqlalchemy import or_
from grease import db
from grease.errors import NotFoundError


class GigRequestStatus(str, enum.Enum):
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    DISMISSED = 'dismissed'


class GigRequest(db.Model):
    """A request from an outside organization for us to perform."""
    __tablename__ = 'gig_requests'

    id = db.Column(db.Integer, primary_key=True)
    time = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    name = db.Column(db.String(255), nullable=False)
    organization = db.Column(db.String(255), nullable=False)
    event_id = db.Column('event', db.Integer, db.ForeignKey('events.id', ondelete='SET NULL'),
                         nullable=True)
    contact_name = db.Column(db.String(255), nullable=False)
    contact_phone = db.Column(db.String(16), nullable=False)
    contact_email = db.Column(db.String(50), nullable=False)
    start_time = db.Column(db.DateTime, nullable=False)
    location = db.Column(db.String(255), nullable=False)
    comments = db.Column(db.Text, nullable=True)
    status = db.Column(db.String(10), nullable=False, default=GigRequestStatus.PENDING.value)

    def __repr__(self):
        return f'<GigRequest {self.id} {self.status}>'

    @classmethod
    def load(cls, request_id):
        gig_request = db.session.get(cls, request_id)
        if gig_request is None:
            raise NotFoundError(f'No gig request with id {request_id}.')
        return gig_request

    @classmethod
    def load_all(cls):
        return cls.query.order_by(cls.time.desc()).all()

    @classmethod
    def load_all_for_semester_and_pending(cls, semester):
        """Requests made since the semester started, plus any still pending."""
        return cls.query.filter(or_(
            cls.time > semester.start_date,
            cls.status == GigRequestStatus.PENDING.value,
        )).order_by(cls.time.desc()).all()

    def to_json(self):
        return {
            'id': self.id,
            'time': self.time.isoformat() if self.time else None,
            'name': self.name,
            'organization': self.organization,
            'event': self.event_id,
            'contact_name': self.contact_name,
            'contact_phone': self.contact_phone,
            'contact_email': self.contact_email,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'location': self.location,
            'comments': self.comments,
            'status': self.status,
        }
