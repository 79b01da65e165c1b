from grease import db
from grease.errors import NotFoundError


class Uniform(db.Model):
    """Outfit worn at a gig."""
    __tablename__ = 'uniforms'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(32), nullable=False)
    color = db.Column(db.String(4), nullable=True)  # hex shorthand, e.g. '#333'
    description = db.Column(db.Text, nullable=True)

    def __repr__(self):
        return f'<Uniform {self.name}>'

    @classmethod
    def load(cls, uniform_id):
        uniform = db.session.get(cls, uniform_id)
        if uniform is None:
            raise NotFoundError(f'No uniform with id {uniform_id}.')
        return uniform

    def to_json(self):
        return {
            'id': self.id,
            'name': self.name,
            'color': self.color,
            'description': self.description,
        }
