"""Test creating, updating, loading and deleting events."""

from datetime import date, datetime

import pytest

from grease import db
from grease.errors import NotFoundError, ValidationError
from grease.forms import EventUpdate
from grease.models import (
    Attendance, Event, Gig, GigEvent, GigRequest, GigRequestStatus, PlainEvent, Uniform,
)
from grease.services import event_store
from tests.conftest import make_new_event, make_new_gig


def make_update(**overrides):
    values = dict(
        name='Moved Rehearsal',
        semester='Fall 2026',
        event_type='rehearsal',
        call_time=datetime(2026, 9, 2, 18, 0),
        release_time=datetime(2026, 9, 2, 20, 0),
        points=5,
        gig_count=False,
        default_attend=True,
        location='Ferst Center',
    )
    values.update(overrides)
    return EventUpdate(**values)


# ============== CREATE ==============

def test_create_single_event(members) -> None:
    # Act
    event_id = event_store.create_event(make_new_event())
    # Assert
    event = db.session.get(Event, event_id)
    assert event.name == 'Tuesday Rehearsal'
    assert event.semester == 'Fall 2026'
    assert event.release_time == datetime(2026, 9, 1, 21, 0)
    assert Gig.query.count() == 0


def test_create_adds_attendance_for_active_members(members) -> None:
    # Act
    event_id = event_store.create_event(make_new_event(default_attend=False))
    # Assert
    rows = Attendance.query.filter_by(event_id=event_id).all()
    assert sorted(row.member_id for row in rows) == sorted(member.id for member in members)
    assert all(row.should_attend is False for row in rows)
    assert all(row.did_attend is False for row in rows)


@pytest.mark.parametrize('release_time', [
    datetime(2026, 9, 1, 19, 0),
    datetime(2026, 9, 1, 18, 0),
])
def test_create_rejects_release_not_after_call(semester, release_time) -> None:
    with pytest.raises(ValidationError, match='Release time must be after call time'):
        event_store.create_event(make_new_event(release_time=release_time))
    assert Event.query.count() == 0


def test_create_rejects_unknown_repeat(semester) -> None:
    with pytest.raises(ValidationError) as excinfo:
        event_store.create_event(make_new_event(repeat='sometimes', repeat_until=date(2026, 10, 1)))
    assert "repeat value 'sometimes'" in excinfo.value.message
    assert 'Release time' not in excinfo.value.message


def test_create_repeat_needs_until(semester) -> None:
    with pytest.raises(ValidationError, match='repeat until'):
        event_store.create_event(make_new_event(repeat='weekly'))


def test_create_rejects_empty_expansion(monkeypatch, members) -> None:
    monkeypatch.setattr(event_store, 'expand', lambda *args: iter(()))
    # Act
    with pytest.raises(ValidationError, match='would render no events'):
        event_store.create_event(make_new_event())
    # Assert
    assert Event.query.count() == 0
    assert Attendance.query.count() == 0


def test_create_repeating_returns_last_id(members) -> None:
    # Act
    event_id = event_store.create_event(
        make_new_event(repeat='weekly', repeat_until=date(2026, 9, 23))
    )
    # Assert
    events = Event.query.order_by(Event.call_time).all()
    assert [event.call_time.date() for event in events] == [
        date(2026, 9, 1), date(2026, 9, 8), date(2026, 9, 15), date(2026, 9, 22),
    ]
    assert event_id == events[-1].id
    assert Attendance.query.count() == 4 * len(members)


def test_create_from_gig_request_links_last_occurrence(members, uniform, gig_request) -> None:
    # Act
    event_id = event_store.create_event(
        make_new_event(event_type='tutti', repeat='biweekly', repeat_until=date(2026, 10, 1)),
        from_request=(gig_request, make_new_gig(uniform)),
    )
    # Assert
    events = Event.query.order_by(Event.call_time).all()
    assert len(events) == 3
    assert event_id == events[-1].id
    assert Gig.query.count() == 3
    request = db.session.get(GigRequest, gig_request.id)
    assert request.event_id == event_id
    assert request.status == GigRequestStatus.ACCEPTED


def test_create_from_gig_request_is_atomic(monkeypatch, members, uniform, gig_request) -> None:
    """A failure on the second occurrence leaves no events, gigs or link behind."""
    calls = []

    def failing_create_for_new_event(event):
        calls.append(event.id)
        if len(calls) == 2:
            raise RuntimeError('attendance insert failed')
        return 0

    monkeypatch.setattr(Attendance, 'create_for_new_event', failing_create_for_new_event)
    # Act
    with pytest.raises(RuntimeError):
        event_store.create_event(
            make_new_event(repeat='weekly', repeat_until=date(2026, 9, 30)),
            from_request=(gig_request, make_new_gig(uniform)),
        )
    # Assert
    assert len(calls) == 2
    assert Event.query.count() == 0
    assert Gig.query.count() == 0
    request = db.session.get(GigRequest, gig_request.id)
    assert request.event_id is None
    assert request.status == GigRequestStatus.PENDING


# ============== LOAD ==============

def test_load_missing_event(semester) -> None:
    with pytest.raises(NotFoundError, match='No event with id 404.'):
        event_store.load_event(404)


def test_load_composes_gig_and_plain_events(members, uniform, gig_request) -> None:
    plain_id = event_store.create_event(make_new_event())
    gig_id = event_store.create_event(
        make_new_event(name='Alumni Dinner', call_time=datetime(2026, 9, 5, 17, 0),
                       release_time=None),
        from_request=(gig_request, make_new_gig(uniform)),
    )
    # Act
    plain = event_store.load_event(plain_id)
    gig = event_store.load_event(gig_id)
    # Assert
    assert isinstance(plain, PlainEvent)
    assert plain.gig is None
    assert isinstance(gig, GigEvent)
    assert gig.gig.uniform_id == uniform.id


def test_load_all_is_newest_first(members) -> None:
    event_store.create_event(make_new_event(name='First', call_time=datetime(2026, 9, 1, 19, 0),
                                            release_time=None))
    event_store.create_event(make_new_event(name='Third', call_time=datetime(2026, 9, 20, 19, 0),
                                            release_time=None))
    event_store.create_event(make_new_event(name='Second', call_time=datetime(2026, 9, 10, 19, 0),
                                            release_time=None))
    # Act
    events = event_store.load_all_events()
    # Assert
    assert [event.event.name for event in events] == ['Third', 'Second', 'First']


def test_load_for_current_semester(members, semester) -> None:
    event_store.create_event(make_new_event(name='Spring Concert', semester='Spring 2026',
                                            call_time=datetime(2026, 4, 20, 19, 0),
                                            release_time=None))
    event_store.create_event(make_new_event(name='Fall Rehearsal'))
    event_store.create_event(make_new_event(name='Fall Sectional', event_type='sectional',
                                            call_time=datetime(2026, 9, 3, 19, 0),
                                            release_time=None))
    # Act
    this_semester = event_store.load_all_for_current_semester(semester)
    sectionals = event_store.load_all_of_type_for_current_semester('sectional', semester)
    # Assert
    assert [event.event.name for event in this_semester] == ['Fall Sectional', 'Fall Rehearsal']
    assert [event.event.name for event in sectionals] == ['Fall Sectional']
    assert len(event_store.load_all_events()) == 3


def test_load_public_gigs_for_current_semester(members, uniform, gig_request, semester) -> None:
    event_store.create_event(make_new_event(name='Rehearsal'))
    event_store.create_event(
        make_new_event(name='Alumni Dinner', call_time=datetime(2026, 9, 5, 17, 0), release_time=None),
        from_request=(gig_request, make_new_gig(uniform, public=True)),
    )
    event_store.create_event(
        make_new_event(name='Private Party', call_time=datetime(2026, 9, 12, 17, 0), release_time=None),
        from_request=(gig_request, make_new_gig(uniform, public=False)),
    )
    event_store.create_event(
        make_new_event(name='Football Game', call_time=datetime(2026, 10, 3, 12, 0), release_time=None),
        from_request=(gig_request, make_new_gig(uniform, public=True)),
    )
    event_store.create_event(
        make_new_event(name='Spring Sing', semester='Spring 2026',
                       call_time=datetime(2026, 4, 10, 18, 0), release_time=None),
        from_request=(gig_request, make_new_gig(uniform, public=True)),
    )
    # Act
    public = event_store.load_public_for_current_semester(semester)
    # Assert
    assert [event.event.name for event in public] == ['Football Game', 'Alumni Dinner']
    assert all(isinstance(event, GigEvent) for event in public)
    assert set(public[0].to_public_json()) == {
        'id', 'name', 'performance_time', 'location', 'summary', 'description',
    }


# ============== UPDATE ==============

def test_update_plain_event_fields(members) -> None:
    event_id = event_store.create_event(make_new_event())
    # Act
    event_store.update_event(event_id, make_update(section='Bass', comments='Bring music'))
    # Assert
    loaded = event_store.load_event(event_id)
    assert isinstance(loaded, PlainEvent)
    assert loaded.event.name == 'Moved Rehearsal'
    assert loaded.event.points == 5
    assert loaded.event.gig_count is False
    assert loaded.event.section == 'Bass'
    assert loaded.event.comments == 'Bring music'
    assert loaded.event.call_time == datetime(2026, 9, 2, 18, 0)


def test_update_missing_event(semester) -> None:
    with pytest.raises(NotFoundError, match='No event with id 77.'):
        event_store.update_event(77, make_update())


def test_update_rejects_release_before_call(members) -> None:
    event_id = event_store.create_event(make_new_event())
    with pytest.raises(ValidationError):
        event_store.update_event(event_id, make_update(release_time=datetime(2026, 9, 2, 17, 0)))


def test_update_gig_requires_performance_time(members, uniform, gig_request) -> None:
    event_id = event_store.create_event(make_new_event(), from_request=(gig_request, make_new_gig(uniform)))
    # Act
    with pytest.raises(ValidationError, match='Performance time is required'):
        event_store.update_event(event_id, make_update(uniform=uniform.id))
    # Assert
    assert event_store.load_event(event_id).event.name == 'Tuesday Rehearsal'


def test_update_gig_requires_uniform(members, uniform, gig_request) -> None:
    event_id = event_store.create_event(make_new_event(), from_request=(gig_request, make_new_gig(uniform)))
    with pytest.raises(ValidationError, match='Uniform is required'):
        event_store.update_event(event_id, make_update(performance_time=datetime(2026, 9, 2, 19, 0)))


def test_update_gig_sets_uniform_and_public_separately(members, uniform, gig_request) -> None:
    """The public flag and the uniform are different columns."""
    polos = Uniform(name='Polos')
    db.session.add(polos)
    db.session.commit()
    event_id = event_store.create_event(
        make_new_event(), from_request=(gig_request, make_new_gig(uniform, public=False))
    )
    # Act
    event_store.update_event(event_id, make_update(
        performance_time=datetime(2026, 9, 2, 19, 0), uniform=polos.id, public=True, price=300,
    ))
    # Assert
    gig = event_store.load_event(event_id).gig
    assert gig.uniform_id == polos.id
    assert gig.public is True
    assert gig.price == 300
    assert gig.performance_time == datetime(2026, 9, 2, 19, 0)


def test_update_gig_keeps_public_when_omitted(members, uniform, gig_request) -> None:
    event_id = event_store.create_event(
        make_new_event(), from_request=(gig_request, make_new_gig(uniform, public=True))
    )
    # Act
    event_store.update_event(event_id, make_update(
        performance_time=datetime(2026, 9, 2, 19, 0), uniform=uniform.id,
    ))
    # Assert
    assert event_store.load_event(event_id).gig.public is True


def test_update_promotes_event_to_gig(members, uniform) -> None:
    event_id = event_store.create_event(make_new_event())
    # Act
    event_store.update_event(event_id, make_update(
        performance_time=datetime(2026, 9, 2, 19, 0), uniform=uniform.id, contact_name='Pat',
    ))
    # Assert
    loaded = event_store.load_event(event_id)
    assert isinstance(loaded, GigEvent)
    assert loaded.gig.contact_name == 'Pat'
    assert loaded.gig.public is False


def test_update_promotion_needs_required_gig_fields(members) -> None:
    event_id = event_store.create_event(make_new_event())
    # Act
    with pytest.raises(ValidationError, match='Performance time is required'):
        event_store.update_event(event_id, make_update(price=100))
    # Assert
    assert Gig.query.count() == 0
    assert isinstance(event_store.load_event(event_id), PlainEvent)


# ============== DELETE ==============

def test_delete_event_cascades(members, uniform, gig_request) -> None:
    event_id = event_store.create_event(make_new_event(), from_request=(gig_request, make_new_gig(uniform)))
    # Act
    event_store.delete_event(event_id)
    # Assert
    assert db.session.get(Event, event_id) is None
    assert Gig.query.count() == 0
    assert Attendance.query.filter_by(event_id=event_id).count() == 0


def test_delete_missing_event(semester) -> None:
    with pytest.raises(NotFoundError, match='No event with id 12.'):
        event_store.delete_event(12)
