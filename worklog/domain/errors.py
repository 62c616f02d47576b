"""
Error taxonomy for the tracker core.

Validation, protection and active-resource errors are raised before any
state is touched, so a rejected operation never leaves partial changes.
Persistence failures are logged at the gateway and never reach the caller
as exceptions from the public store API.
"""


class TrackerError(Exception):
    """Base class for all tracker errors"""


class ValidationError(TrackerError):
    """Label is empty or longer than the allowed length"""


class ProtectedEntityError(TrackerError):
    """Attempt to delete the system project"""


class ActiveResourceError(TrackerError):
    """Attempt to delete a task that owns the active timer"""


class PersistenceFailure(TrackerError):
    """Storage read/write failed; in-memory state stays authoritative"""
