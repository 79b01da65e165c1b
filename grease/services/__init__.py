# Business logic services
from grease.services.event_store import (
    create_event,
    update_event,
    delete_event,
    load_event,
    load_all_events,
    load_all_for_current_semester,
    load_all_of_type_for_current_semester,
    load_public_for_current_semester,
)
from grease.services.gig_requests import (
    accept_gig_request,
    set_gig_request_status,
    submit_gig_request,
)

__all__ = [
    'create_event',
    'update_event',
    'delete_event',
    'load_event',
    'load_all_events',
    'load_all_for_current_semester',
    'load_all_of_type_for_current_semester',
    'load_public_for_current_semester',
    'accept_gig_request',
    'set_gig_request_status',
    'submit_gig_request',
]
