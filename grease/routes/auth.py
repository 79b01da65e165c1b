"""
Request-scoped helpers shared by the JSON blueprints.

Logging in happens elsewhere; by the time a request reaches us the
session either carries a member_id or it doesn't.
"""

from functools import wraps
from flask import g, request, session

from grease import db
from grease.errors import Unauthorized
from grease.models import Member, Semester


def get_current_member():
    """Get the currently logged-in member."""
    member_id = session.get('member_id')
    if member_id:
        return db.session.get(Member, member_id)
    return None


def member_required(f):
    """Decorator to require a logged-in member. Sets g.member."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        member = get_current_member()
        if member is None:
            raise Unauthorized('Not logged in')
        g.member = member
        return f(*args, **kwargs)
    return decorated_function


def get_current_semester():
    """The current semester, looked up at most once per request."""
    if 'current_semester' not in g:
        g.current_semester = Semester.load_current()
    return g.current_semester


def flag(name):
    """Read a boolean query parameter like ?full=true."""
    return request.args.get(name, '').lower() in ('1', 'true', 'yes')
