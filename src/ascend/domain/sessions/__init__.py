# Domain Sessions Package
from .models import SessionRecord
from .ports import SessionStore
from .validation import new_session_record, parse_calendar_date

__all__ = ["SessionRecord", "SessionStore", "new_session_record", "parse_calendar_date"]
