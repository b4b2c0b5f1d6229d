"""
finances/results.py
───────────────────
The value every service function returns.

A Result is either a success carrying `data`, or a failure carrying an
ErrorKind and a human-readable message.  Views branch on `kind` (mapped to an
HTTP status) and hand `to_envelope()` to the client:

    {"success": true,  "data": ...}
    {"success": false, "error": "Student not found"}
"""

import enum
import logging
from functools import wraps

from django.db import DatabaseError

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    VALIDATION   = 'validation'
    UNAUTHORIZED = 'unauthorized'
    NOT_FOUND    = 'not_found'
    CONFLICT     = 'conflict'
    INTERNAL     = 'internal'


HTTP_STATUS = {
    ErrorKind.VALIDATION:   400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND:    404,
    ErrorKind.CONFLICT:     409,
    ErrorKind.INTERNAL:     500,
}


class Result:
    __slots__ = ('data', 'error', 'kind')

    def __init__(self, data=None, error=None, kind=None):
        self.data = data
        self.error = error
        self.kind = kind

    @classmethod
    def success(cls, data=None):
        return cls(data=data)

    @classmethod
    def failure(cls, kind, error):
        return cls(error=error, kind=kind)

    @property
    def ok(self):
        return self.kind is None

    @property
    def http_status(self):
        return 200 if self.ok else HTTP_STATUS[self.kind]

    def to_envelope(self):
        if self.ok:
            envelope = {'success': True}
            if self.data is not None:
                envelope['data'] = self.data
            return envelope
        return {'success': False, 'error': self.error}

    def __repr__(self):
        if self.ok:
            return f'<Result ok data={self.data!r}>'
        return f'<Result {self.kind.value} error={self.error!r}>'


def service_boundary(message):
    """
    Decorator: a DatabaseError escaping the wrapped service is logged and
    turned into an INTERNAL failure carrying *message*.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except DatabaseError:
                logger.exception('%s failed', fn.__qualname__)
                return Result.failure(ErrorKind.INTERNAL, message)
        return wrapper
    return decorator
