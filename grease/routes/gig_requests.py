"""
Gig request routes (JSON).

Anyone can submit a request; officers work through them from here.
"""

from flask import Blueprint, jsonify

from grease.errors import ValidationError
from grease.forms import NewEvent, NewGig, NewGigRequest
from grease.models import GigRequest
from grease.routes.auth import member_required, get_current_semester, flag
from grease.routes.events import get_json_body
from grease.services.gig_requests import (
    accept_gig_request,
    set_gig_request_status,
    submit_gig_request,
)

gig_requests_bp = Blueprint('gig_requests', __name__, url_prefix='/gig_requests')


@gig_requests_bp.route('/', methods=['POST'])
def submit():
    """Public intake form for outside organizations."""
    form = NewGigRequest.from_json(get_json_body())
    request_id = submit_gig_request(form)
    return jsonify({'success': True, 'id': request_id}), 201


@gig_requests_bp.route('/')
@member_required
def list_gig_requests():
    """Requests from this semester plus anything still pending. ?all=true for every request."""
    if flag('all'):
        gig_requests = GigRequest.load_all()
    else:
        gig_requests = GigRequest.load_all_for_semester_and_pending(get_current_semester())

    return jsonify({
        'success': True,
        'gig_requests': [gig_request.to_json() for gig_request in gig_requests]
    })


@gig_requests_bp.route('/<int:request_id>')
@member_required
def get_gig_request(request_id):
    return jsonify({'success': True, 'gig_request': GigRequest.load(request_id).to_json()})


@gig_requests_bp.route('/<int:request_id>/status', methods=['POST'])
@member_required
def set_status(request_id):
    data = get_json_body()
    if 'status' not in data:
        raise ValidationError("Missing required field 'status'.")
    set_gig_request_status(request_id, data['status'])
    return jsonify({'success': True})


@gig_requests_bp.route('/<int:request_id>/create_event', methods=['POST'])
@member_required
def create_event_for_request(request_id):
    """
    Accept a gig request by creating its event.

    Body:
        {"event": {...new event...}, "gig": {...gig details...}}
        The event's semester defaults to the current one.
    """
    data = get_json_body()
    event_data = data.get('event')
    gig_data = data.get('gig')
    if not isinstance(event_data, dict) or not isinstance(gig_data, dict):
        raise ValidationError("Expected 'event' and 'gig' objects in the request body.")

    event_data.setdefault('semester', get_current_semester().name)
    event_id = accept_gig_request(request_id, NewEvent.from_json(event_data), NewGig.from_json(gig_data))
    return jsonify({'success': True, 'id': event_id}), 201
