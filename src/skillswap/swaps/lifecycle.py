"""Swap request state machine.

    pending  -> accepted | rejected | cancelled
    accepted -> completed

rejected, completed and cancelled are terminal.
"""

from __future__ import annotations

VALID_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["accepted", "rejected", "cancelled"],
    "accepted": ["completed"],
    "rejected": [],
    "completed": [],
    "cancelled": [],
}

# Which participant may move a request into each target status.
RECIPIENT_ONLY = frozenset({"accepted", "rejected"})
REQUESTER_ONLY = frozenset({"cancelled"})

# Timestamp column stamped when a request enters the status.
TIMESTAMP_FIELDS: dict[str, str] = {
    "accepted": "accepted_at",
    "completed": "completed_at",
    "cancelled": "cancelled_at",
}


def validate_transition(current_status: str, target_status: str) -> None:
    """Validate a state transition. Raises ValueError if invalid."""
    valid = VALID_TRANSITIONS.get(current_status, [])
    if target_status not in valid:
        raise ValueError(
            f"Invalid transition: {current_status} -> {target_status}. "
            f"Valid transitions: {valid}"
        )


def check_actor(target_status: str, *, is_requester: bool, is_recipient: bool) -> None:
    """
    Check that the acting participant may set `target_status`.

    Raises PermissionError for non-participants and for the wrong side of the
    swap (e.g. the requester trying to accept).
    """
    if not (is_requester or is_recipient):
        msg = "Not authorized to update this request"
        raise PermissionError(msg)
    if target_status in RECIPIENT_ONLY and not is_recipient:
        msg = f"Only the recipient can set status '{target_status}'"
        raise PermissionError(msg)
    if target_status in REQUESTER_ONLY and not is_requester:
        msg = f"Only the requester can set status '{target_status}'"
        raise PermissionError(msg)
