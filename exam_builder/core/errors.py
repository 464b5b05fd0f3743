"""
Composition error taxonomy.

Every error is recoverable at the UI layer except ``CycleDetected``, which
means a calling flow tried something no builder page can produce.
``CreatedButUnlinked`` is a partial success: the entity exists, only the
link step failed, so the caller retries the link instead of the create.
"""
from typing import Optional


class CompositionError(Exception):
    code = "composition_error"
    status_code = 400

    def __init__(self, message: str = "", **extra):
        super().__init__(message or self.code)
        self.message = message or self.code
        self.extra = extra

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code, **self.extra}


class NotFound(CompositionError):
    code = "not_found"
    status_code = 404


class AlreadyLinked(CompositionError):
    code = "already_linked"
    status_code = 409


class CycleDetected(CompositionError):
    code = "cycle_detected"
    status_code = 500


class InvalidLink(CompositionError):
    code = "invalid_link"
    status_code = 422


class InvalidOrder(CompositionError):
    code = "invalid_order"
    status_code = 422


class OutOfRange(CompositionError):
    code = "out_of_range"
    status_code = 422


class InvalidRange(CompositionError):
    code = "invalid_range"
    status_code = 422


class OverlappingGroup(CompositionError):
    code = "overlapping_group"
    status_code = 409


class StaleVersion(CompositionError):
    code = "stale_version"
    status_code = 409


class RequestTokenReused(CompositionError):
    code = "request_token_reused"
    status_code = 409


class CreatedButUnlinked(CompositionError):
    code = "created_but_unlinked"
    status_code = 207

    def __init__(self, child_id: str, parent_id: str, cause: Optional[CompositionError] = None):
        reason = cause.code if cause is not None else "unknown"
        super().__init__(
            f"Created {child_id} but could not link it to {parent_id}: {reason}",
            id=child_id,
            parent_id=parent_id,
            reason=reason,
        )
        self.child_id = child_id
        self.parent_id = parent_id
        self.cause = cause
