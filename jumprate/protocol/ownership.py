"""Two-phase ownership transfer.

The owner nominates a successor, and authority only moves once that nominee
accepts.  Transitions are pure: each returns the next :class:`OwnershipState`
together with the events it produces, and raises :class:`Unauthorized` without
producing anything when the caller lacks the required role.
"""

from __future__ import annotations

from dataclasses import dataclass

from jumprate.protocol.errors import Unauthorized
from jumprate.protocol.events import NewOwner, NewPendingOwner, RateModelEvent


@dataclass(frozen=True)
class OwnershipState:
    owner: str
    pending_owner: str | None = None

    @property
    def transfer_pending(self) -> bool:
        return self.pending_owner is not None


def require_owner(state: OwnershipState, caller: str, action: str) -> None:
    if caller != state.owner:
        raise Unauthorized(action, caller, state.owner)


def set_pending_owner(
    state: OwnershipState, caller: str, nominee: str
) -> tuple[OwnershipState, list[RateModelEvent]]:
    """Nominate *nominee*, replacing any earlier nomination."""
    require_owner(state, caller, "set_pending_owner")
    new_state = OwnershipState(owner=state.owner, pending_owner=nominee)
    return new_state, [NewPendingOwner(state.pending_owner, nominee)]


def cancel_pending_owner(
    state: OwnershipState, caller: str
) -> tuple[OwnershipState, list[RateModelEvent]]:
    """Withdraw the current nomination, if any."""
    require_owner(state, caller, "cancel_pending_owner")
    if not state.transfer_pending:
        return state, []
    new_state = OwnershipState(owner=state.owner)
    return new_state, [NewPendingOwner(state.pending_owner, None)]


def accept_ownership(
    state: OwnershipState, caller: str
) -> tuple[OwnershipState, list[RateModelEvent]]:
    """Complete the transfer; only the pending owner may call this."""
    if state.pending_owner is None or caller != state.pending_owner:
        raise Unauthorized("accept_ownership", caller, state.pending_owner)
    new_state = OwnershipState(owner=state.pending_owner)
    events: list[RateModelEvent] = [
        NewOwner(state.owner, state.pending_owner),
        NewPendingOwner(state.pending_owner, None),
    ]
    return new_state, events
