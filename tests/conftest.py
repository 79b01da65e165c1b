"""Pytest fixtures."""

from datetime import datetime

import pytest

from grease import create_app, db
from grease.forms import NewEvent, NewGig
from grease.models import ActiveSemester, GigRequest, Member, Semester, Uniform


def make_new_event(**overrides):
    """A NewEvent for a Tuesday rehearsal in the current semester."""
    values = dict(
        name='Tuesday Rehearsal',
        semester='Fall 2026',
        event_type='rehearsal',
        call_time=datetime(2026, 9, 1, 19, 0),
        release_time=datetime(2026, 9, 1, 21, 0),
        points=10,
        location='Couch Building',
    )
    values.update(overrides)
    return NewEvent(**values)


def make_new_gig(uniform, **overrides):
    values = dict(
        performance_time=datetime(2026, 9, 1, 20, 0),
        uniform=uniform.id,
        contact_name='Dana Reyes',
        contact_email='dana@example.org',
        price=250,
        public=True,
        summary='Alumni dinner',
    )
    values.update(overrides)
    return NewGig(**values)


@pytest.fixture
def app():
    """App with an empty in-memory database, inside an app context."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def semester(app) -> Semester:
    """The current semester, plus an older one."""
    db.session.add(Semester(
        name='Spring 2026',
        start_date=datetime(2026, 1, 5),
        end_date=datetime(2026, 5, 1),
        current=False,
    ))
    current = Semester(
        name='Fall 2026',
        start_date=datetime(2026, 8, 17),
        end_date=datetime(2026, 12, 15),
        current=True,
    )
    db.session.add(current)
    db.session.commit()
    return current


@pytest.fixture
def members(semester) -> list:
    """Three members active this semester and one who isn't."""
    active = [
        Member(email='tenor1@example.edu', first_name='Sam', last_name='Okafor'),
        Member(email='bari@example.edu', first_name='Jules', last_name='Park'),
        Member(email='bass@example.edu', first_name='Rowan', last_name='Diaz'),
    ]
    inactive = Member(email='alum@example.edu', first_name='Avery', last_name='Lin')
    db.session.add_all(active + [inactive])
    db.session.flush()
    for member, section in zip(active, ['Tenor 1', 'Baritone', 'Bass']):
        db.session.add(ActiveSemester(member_id=member.id, semester='Fall 2026', section=section))
    db.session.add(ActiveSemester(member_id=inactive.id, semester='Spring 2026'))
    db.session.commit()
    return active


@pytest.fixture
def uniform(app) -> Uniform:
    uniform = Uniform(name='Jackets', color='#333', description='Black jackets, gold ties')
    db.session.add(uniform)
    db.session.commit()
    return uniform


@pytest.fixture
def gig_request(semester) -> GigRequest:
    """A pending request made during the current semester."""
    gig_request = GigRequest(
        time=datetime(2026, 8, 20, 12, 0),
        name='Alumni Dinner',
        organization='Alumni Association',
        contact_name='Dana Reyes',
        contact_phone='4045550100',
        contact_email='dana@example.org',
        start_time=datetime(2026, 9, 1, 19, 0),
        location='Student Center Ballroom',
    )
    db.session.add(gig_request)
    db.session.commit()
    return gig_request


@pytest.fixture
def logged_in_client(client, members):
    """Test client with the first member's session set."""
    with client.session_transaction() as sess:
        sess['member_id'] = members[0].id
    return client
