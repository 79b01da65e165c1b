from datetime import datetime
from grease import db


class Member(db.Model):
    """Club member."""
    __tablename__ = 'members'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(50), unique=True, nullable=False)
    first_name = db.Column(db.String(25), nullable=False)
    last_name = db.Column(db.String(25), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # Relationships
    active_semesters = db.relationship('ActiveSemester', backref='member', lazy='dynamic',
                                       cascade='all, delete-orphan')
    attendances = db.relationship('Attendance', backref='member', lazy='dynamic',
                                  cascade='all, delete-orphan')
    absence_requests = db.relationship('AbsenceRequest', backref='member', lazy='dynamic',
                                       cascade='all, delete-orphan')

    def __repr__(self):
        return f'<Member {self.email}>'

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'


class ActiveSemester(db.Model):
    """A member's enrollment in one semester."""
    __tablename__ = 'active_semesters'

    id = db.Column(db.Integer, primary_key=True)
    member_id = db.Column(db.Integer, db.ForeignKey('members.id', ondelete='CASCADE'), nullable=False)
    semester = db.Column(db.String(32), db.ForeignKey('semesters.name', ondelete='CASCADE'), nullable=False)
    enrollment = db.Column(db.String(10), nullable=False, default='club')  # class, club
    section = db.Column(db.String(20), nullable=True)

    __table_args__ = (
        db.UniqueConstraint('member_id', 'semester', name='unique_active_semester'),
    )

    def __repr__(self):
        return f'<ActiveSemester member={self.member_id} semester={self.semester}>'
