from grease import db
from grease.errors import NotFoundError


class Semester(db.Model):
    """An academic semester. Exactly one is flagged as current."""
    __tablename__ = 'semesters'

    name = db.Column(db.String(32), primary_key=True)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    gig_requirement = db.Column(db.Integer, nullable=False, default=5)
    current = db.Column(db.Boolean, nullable=False, default=False)

    def __repr__(self):
        return f'<Semester {self.name}>'

    @classmethod
    def load_current(cls):
        """Get the semester flagged as current."""
        semester = cls.query.filter_by(current=True).first()
        if semester is None:
            raise NotFoundError('No current semester was set.')
        return semester
