"""
Event routes (JSON).

Includes:
- Listing events for the current semester, optionally by type
- Public gig listing (no login)
- Single event lookup, with an optional full form for the logged-in member
- Create (with repeats), update and delete
"""

from flask import Blueprint, request, jsonify, g

from grease.errors import ValidationError
from grease.forms import EventUpdate, NewEvent
from grease.routes.auth import member_required, get_current_semester, flag
from grease.services.event_store import (
    create_event,
    delete_event,
    load_all_events,
    load_all_for_current_semester,
    load_all_of_type_for_current_semester,
    load_public_for_current_semester,
    load_event,
    update_event,
)

events_bp = Blueprint('events', __name__, url_prefix='/events')


def get_json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Expected a JSON object in the request body.')
    return data


@events_bp.route('/')
@member_required
def list_events():
    """
    List events, newest first.

    Query params:
        type: only events of this type (current semester)
        all: events from every semester instead of just the current one
    """
    if flag('all'):
        events = load_all_events()
    else:
        semester = get_current_semester()
        event_type = request.args.get('type')
        if event_type:
            events = load_all_of_type_for_current_semester(event_type, semester)
        else:
            events = load_all_for_current_semester(semester)

    return jsonify({
        'success': True,
        'events': [event.to_json() for event in events]
    })


@events_bp.route('/public')
def list_public_events():
    """Public gigs this semester. No login needed."""
    events = load_public_for_current_semester(get_current_semester())
    return jsonify({
        'success': True,
        'events': [event.to_public_json() for event in events]
    })


@events_bp.route('/<int:event_id>')
@member_required
def get_event(event_id):
    """Get one event. ?full=true adds the uniform and the member's attendance."""
    event = load_event(event_id)
    data = event.to_json_full(g.member) if flag('full') else event.to_json()
    return jsonify({'success': True, 'event': data})


@events_bp.route('/<int:event_id>/sectionals')
@member_required
def get_sectionals(event_id):
    """Sectionals held the same week as an event."""
    event = load_event(event_id).event
    return jsonify({
        'success': True,
        'sectionals': [sectional.minimal() for sectional in event.load_sectionals_the_week_of()]
    })


@events_bp.route('/', methods=['POST'])
@member_required
def new_event():
    """Create an event. Returns the id of the last occurrence created."""
    form = NewEvent.from_json(get_json_body())
    event_id = create_event(form)
    return jsonify({'success': True, 'id': event_id}), 201


@events_bp.route('/<int:event_id>', methods=['POST'])
@member_required
def edit_event(event_id):
    form = EventUpdate.from_json(get_json_body())
    update_event(event_id, form)
    return jsonify({'success': True})


@events_bp.route('/<int:event_id>', methods=['DELETE'])
@member_required
def remove_event(event_id):
    delete_event(event_id)
    return jsonify({'success': True})
