"""
Gig request workflow.

Requests start out pending. From there they can be dismissed (and
reopened later), or accepted once an event exists for them. Accepted is
final.

The normal way to accept a request is accept_gig_request(), which creates
the event and links the request in one transaction.
"""

from flask import current_app

from grease import db
from grease.errors import ValidationError
from grease.models import GigRequest, GigRequestStatus
from grease.services.event_store import create_event
from grease.transactions import transaction


def parse_status(value):
    try:
        return GigRequestStatus(value)
    except ValueError:
        raise ValidationError(
            f"The status '{value}' is not allowed. Use 'pending', 'accepted', or 'dismissed'."
        )


def check_transition(current, new):
    """Reject illegal status changes. Returns True if nothing would change."""
    if current == new:
        return True
    if current == GigRequestStatus.ACCEPTED:
        raise ValidationError('Cannot change the status of an accepted gig request.')
    if current == GigRequestStatus.DISMISSED and new == GigRequestStatus.ACCEPTED:
        raise ValidationError(
            'Cannot directly accept a gig request if it is dismissed. Please reopen it first.'
        )
    return False


def set_gig_request_status(request_id, status):
    """Move a gig request to a new status."""
    status = parse_status(status)
    gig_request = GigRequest.load(request_id)
    current = GigRequestStatus(gig_request.status)

    if check_transition(current, status):
        return

    if status == GigRequestStatus.ACCEPTED and gig_request.event_id is None:
        raise ValidationError(
            'Must create the event for the gig request first before marking it as accepted.'
        )

    with transaction():
        gig_request.status = status.value

    current_app.logger.info(f"Gig request {request_id}: {current.value} -> {status.value}")


def accept_gig_request(request_id, new_event, new_gig):
    """
    Accept a gig request by creating its event.

    The status check runs before create_event opens its transaction, so
    two concurrent accepts of one request can both pass it. No row lock is
    taken; the database's isolation level is all that guards this.

    Returns:
        The new event id (the last occurrence if the event repeats).
    """
    gig_request = GigRequest.load(request_id)
    current = GigRequestStatus(gig_request.status)

    if check_transition(current, GigRequestStatus.ACCEPTED):
        raise ValidationError(f'Gig request {request_id} has already been accepted.')

    event_id = create_event(new_event, from_request=(gig_request, new_gig))
    current_app.logger.info(f"Gig request {request_id} accepted as event {event_id}")
    return event_id


def submit_gig_request(form):
    """Record a new request from an outside organization. Returns its id."""
    with transaction():
        gig_request = GigRequest(
            name=form.name,
            organization=form.organization,
            contact_name=form.contact_name,
            contact_phone=form.contact_phone,
            contact_email=form.contact_email,
            start_time=form.start_time,
            location=form.location,
            comments=form.comments,
            status=GigRequestStatus.PENDING.value,
        )
        db.session.add(gig_request)
        db.session.flush()

    current_app.logger.info(f"New gig request {gig_request.id} from {form.organization}")
    return gig_request.id
