"""
Request payloads for events, gigs and gig requests.

Each form is built from a JSON dict with from_json(), which raises a
ValidationError naming the first missing or malformed field.
"""

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Optional

from grease.errors import ValidationError


MISSING = object()


def _get(data, key, required=False, default=None):
    value = data.get(key, MISSING)
    if value is MISSING or value is None:
        if required:
            raise ValidationError(f"Missing required field '{key}'.")
        return default
    return value


def _str(data, key, required=False, default=None):
    value = _get(data, key, required, default)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Field '{key}' must be a string.")
    return value


def _datetime(data, key, required=False):
    value = _get(data, key, required)
    if value is None:
        return None
    if not isinstance(value, datetime):
        try:
            value = datetime.fromisoformat(value)
        except (TypeError, ValueError):
            raise ValidationError(f"Field '{key}' must be an ISO 8601 date-time.")
    # stored times are naive local times
    if value.tzinfo is not None:
        raise ValidationError(f"Field '{key}' must be a local date-time without a UTC offset.")
    return value


def _date(data, key, required=False):
    value = _get(data, key, required)
    if value is None or isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Field '{key}' must be an ISO 8601 date.")


def _int(data, key, required=False):
    value = _get(data, key, required)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Field '{key}' must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Field '{key}' must be an integer.")


def _bool(data, key, required=False, default=None):
    value = _get(data, key, required, default)
    if value is not None and not isinstance(value, bool):
        raise ValidationError(f"Field '{key}' must be true or false.")
    return value


@dataclass
class NewGig:
    performance_time: datetime
    uniform: int
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    price: Optional[int] = None
    public: bool = False
    summary: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_json(cls, data):
        return cls(
            performance_time=_datetime(data, 'performance_time', required=True),
            uniform=_int(data, 'uniform', required=True),
            contact_name=_str(data, 'contact_name'),
            contact_email=_str(data, 'contact_email'),
            contact_phone=_str(data, 'contact_phone'),
            price=_int(data, 'price'),
            public=_bool(data, 'public', default=False),
            summary=_str(data, 'summary'),
            description=_str(data, 'description'),
        )


@dataclass
class NewEvent:
    name: str
    semester: str
    event_type: str
    call_time: datetime
    points: int
    release_time: Optional[datetime] = None
    comments: Optional[str] = None
    location: Optional[str] = None
    gig_count: bool = True
    default_attend: bool = True
    section: Optional[str] = None
    repeat: str = 'no'
    repeat_until: Optional[date] = None

    @classmethod
    def from_json(cls, data):
        return cls(
            name=_str(data, 'name', required=True),
            semester=_str(data, 'semester', required=True),
            event_type=_str(data, 'type', required=True),
            call_time=_datetime(data, 'call_time', required=True),
            points=_int(data, 'points', required=True),
            release_time=_datetime(data, 'release_time'),
            comments=_str(data, 'comments'),
            location=_str(data, 'location'),
            gig_count=_bool(data, 'gig_count', default=True),
            default_attend=_bool(data, 'default_attend', default=True),
            section=_str(data, 'section'),
            repeat=_str(data, 'repeat', default='no'),
            repeat_until=_date(data, 'repeat_until'),
        )


@dataclass
class EventUpdate:
    name: str
    semester: str
    event_type: str
    call_time: datetime
    points: int
    gig_count: bool
    default_attend: bool
    release_time: Optional[datetime] = None
    comments: Optional[str] = None
    location: Optional[str] = None
    section: Optional[str] = None
    # gig fields
    performance_time: Optional[datetime] = None
    uniform: Optional[int] = None
    contact_name: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    price: Optional[int] = None
    public: Optional[bool] = None
    summary: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_json(cls, data):
        return cls(
            name=_str(data, 'name', required=True),
            semester=_str(data, 'semester', required=True),
            event_type=_str(data, 'type', required=True),
            call_time=_datetime(data, 'call_time', required=True),
            points=_int(data, 'points', required=True),
            gig_count=_bool(data, 'gig_count', required=True),
            default_attend=_bool(data, 'default_attend', required=True),
            release_time=_datetime(data, 'release_time'),
            comments=_str(data, 'comments'),
            location=_str(data, 'location'),
            section=_str(data, 'section'),
            performance_time=_datetime(data, 'performance_time'),
            uniform=_int(data, 'uniform'),
            contact_name=_str(data, 'contact_name'),
            contact_email=_str(data, 'contact_email'),
            contact_phone=_str(data, 'contact_phone'),
            price=_int(data, 'price'),
            public=_bool(data, 'public'),
            summary=_str(data, 'summary'),
            description=_str(data, 'description'),
        )

    @property
    def has_gig_fields(self):
        gig_fields = {field.name for field in fields(NewGig)}
        return any(getattr(self, name) is not None for name in gig_fields)


@dataclass
class NewGigRequest:
    name: str
    organization: str
    contact_name: str
    contact_phone: str
    contact_email: str
    start_time: datetime
    location: str
    comments: Optional[str] = None

    @classmethod
    def from_json(cls, data):
        return cls(
            name=_str(data, 'name', required=True),
            organization=_str(data, 'organization', required=True),
            contact_name=_str(data, 'contact_name', required=True),
            contact_phone=_str(data, 'contact_phone', required=True),
            contact_email=_str(data, 'contact_email', required=True),
            start_time=_datetime(data, 'start_time', required=True),
            location=_str(data, 'location', required=True),
            comments=_str(data, 'comments'),
        )
