"""
Event Store - creating, updating, loading and deleting events.

Events are read through a left join with the gigs table and decoded once
into a PlainEvent or GigEvent (see grease.models.event.compose).
Every write runs inside a single transaction.
"""

from flask import current_app

from grease import db
from grease.errors import NotFoundError, ServerError, ValidationError
from grease.models import Attendance, Event, Gig, GigRequestStatus, compose
from grease.services.recurrence import Period, expand
from grease.transactions import transaction


def _event_with_gig_query():
    return db.session.query(Event, Gig).outerjoin(Gig, Gig.event_id == Event.id)


def _check_release_time(call_time, release_time):
    if release_time is not None and release_time <= call_time:
        raise ValidationError('Release time must be after call time if it is supplied.')


def _require_gig_fields(event_update):
    if event_update.performance_time is None:
        raise ValidationError('Performance time is required on events that are gigs.')
    if event_update.uniform is None:
        raise ValidationError('Uniform is required on events that are gigs.')


# ============== LOADING ==============

def load_event(event_id):
    """Get one event with its gig details, if any."""
    row = _event_with_gig_query().filter(Event.id == event_id).first()
    if row is None:
        raise NotFoundError(f'No event with id {event_id}.')
    return compose(*row)


def load_all_events():
    rows = _event_with_gig_query().order_by(Event.call_time.desc()).all()
    return [compose(event, gig) for event, gig in rows]


def load_all_for_current_semester(semester):
    """All events in the given (current) semester, newest first."""
    rows = _event_with_gig_query().filter(
        Event.semester == semester.name
    ).order_by(Event.call_time.desc()).all()
    return [compose(event, gig) for event, gig in rows]


def load_all_of_type_for_current_semester(event_type, semester):
    rows = _event_with_gig_query().filter(
        Event.semester == semester.name,
        Event.event_type == event_type,
    ).order_by(Event.call_time.desc()).all()
    return [compose(event, gig) for event, gig in rows]


def load_public_for_current_semester(semester):
    """Public gigs in the given (current) semester, newest first."""
    rows = db.session.query(Event, Gig).join(Gig, Gig.event_id == Event.id).filter(
        Event.semester == semester.name,
        Gig.public.is_(True),
    ).order_by(Event.call_time.desc()).all()
    return [view for view in (compose(event, gig) for event, gig in rows) if view.is_gig]


# ============== WRITING ==============

def create_event(new_event, from_request=None):
    """
    Create an event, or one event per occurrence if it repeats.

    Args:
        new_event: NewEvent form
        from_request: optional (GigRequest, NewGig) when the event is being
            made for a gig request. Each occurrence gets a gig row and the
            request is linked and marked accepted.

    Returns:
        The id of the LAST occurrence created, not the first. The gig
        request (if any) is linked to this same id, and callers use it for
        anything they do with the new event afterwards.
    """
    _check_release_time(new_event.call_time, new_event.release_time)

    period = Period.parse(new_event.repeat)
    if period is not None and new_event.repeat_until is None:
        raise ValidationError('Must supply a repeat until time if repeat is supplied.')

    occurrences = list(expand(new_event.call_time, new_event.release_time,
                              period, new_event.repeat_until))
    if not occurrences:
        raise ValidationError(
            'The repeat setting would render no events, please check your repeat settings.'
        )

    with transaction():
        new_ids = []
        for call_time, release_time in occurrences:
            event = Event(
                name=new_event.name,
                semester=new_event.semester,
                event_type=new_event.event_type,
                call_time=call_time,
                release_time=release_time,
                points=new_event.points,
                comments=new_event.comments,
                location=new_event.location,
                gig_count=new_event.gig_count,
                default_attend=new_event.default_attend,
                section=new_event.section,
            )
            db.session.add(event)
            db.session.flush()
            if event.id is None:
                raise ServerError('Error inserting new event into database.')

            Attendance.create_for_new_event(event)

            if from_request is not None:
                _gig_request, new_gig = from_request
                db.session.add(Gig(
                    event_id=event.id,
                    performance_time=new_gig.performance_time,
                    uniform_id=new_gig.uniform,
                    contact_name=new_gig.contact_name,
                    contact_email=new_gig.contact_email,
                    contact_phone=new_gig.contact_phone,
                    price=new_gig.price,
                    public=new_gig.public,
                    summary=new_gig.summary,
                    description=new_gig.description,
                ))

            new_ids.append(event.id)

        last_id = new_ids[-1]

        if from_request is not None:
            gig_request, _new_gig = from_request
            gig_request.event_id = last_id
            gig_request.status = GigRequestStatus.ACCEPTED.value

    current_app.logger.info(f"Created {len(new_ids)} event(s) '{new_event.name}', last id {last_id}")
    return last_id


def update_event(event_id, event_update):
    """
    Update an event and its gig details.

    Supplying gig fields for an event that isn't a gig turns it into one.
    Performance time and uniform are required whenever gig details are
    written. The public flag keeps its current value when left out.
    """
    current = load_event(event_id)
    _check_release_time(event_update.call_time, event_update.release_time)

    with transaction():
        if current.is_gig:
            _require_gig_fields(event_update)
            gig = current.gig
            gig.performance_time = event_update.performance_time
            gig.uniform_id = event_update.uniform
            gig.contact_name = event_update.contact_name
            gig.contact_email = event_update.contact_email
            gig.contact_phone = event_update.contact_phone
            gig.price = event_update.price
            if event_update.public is not None:
                gig.public = event_update.public
            gig.summary = event_update.summary
            gig.description = event_update.description
        elif event_update.has_gig_fields:
            _require_gig_fields(event_update)
            db.session.add(Gig(
                event_id=event_id,
                performance_time=event_update.performance_time,
                uniform_id=event_update.uniform,
                contact_name=event_update.contact_name,
                contact_email=event_update.contact_email,
                contact_phone=event_update.contact_phone,
                price=event_update.price,
                public=bool(event_update.public),
                summary=event_update.summary,
                description=event_update.description,
            ))

        event = current.event
        event.name = event_update.name
        event.semester = event_update.semester
        event.event_type = event_update.event_type
        event.call_time = event_update.call_time
        event.release_time = event_update.release_time
        event.points = event_update.points
        event.comments = event_update.comments
        event.location = event_update.location
        event.gig_count = event_update.gig_count
        event.default_attend = event_update.default_attend
        event.section = event_update.section

    current_app.logger.info(f"Updated event {event_id}")


def delete_event(event_id):
    """Delete an event. Its gig, attendance and absence requests go with it."""
    event = db.session.get(Event, event_id)
    if event is None:
        raise NotFoundError(f'No event with id {event_id}.')

    with transaction():
        db.session.delete(event)

    current_app.logger.info(f"Deleted event {event_id}")
