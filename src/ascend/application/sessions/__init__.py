# Application Sessions Package
from .payloads import SessionPayload, record_from_payload, record_to_payload
from .service import SessionService, apply_session_update, filter_sessions

__all__ = [
    "SessionPayload",
    "SessionService",
    "apply_session_update",
    "filter_sessions",
    "record_from_payload",
    "record_to_payload",
]
