"""
Reveal Gate -- plaintext only after the owner signs a challenge.

    IDLE -> CHALLENGING -> AUTHORIZED -> REVEALED -> (hide) -> IDLE
                       \\-> DENIED -> IDLE
                       \\-> IDLE (cancelled)

The signature authenticates the owner; it does not feed into decryption.
Whether it should also bind the key to the wallet is an open question,
and the placeholder cipher cannot do that anyway.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from pathlib import Path
from typing import Optional

from .audit import AuditEvent, audit_event
from .cipher import CipherAdapter, PlaceholderCipher
from .errors import FormatError, InvalidTransition, RevealDenied, SignatureRejected
from .models import Record
from .session import Session

logger = logging.getLogger("extkit.reveal")


class RevealState(str, Enum):
    """States of a reveal attempt."""

    IDLE = "idle"
    CHALLENGING = "challenging"
    AUTHORIZED = "authorized"
    REVEALED = "revealed"
    DENIED = "denied"


_TRANSITIONS: dict[RevealState, frozenset[RevealState]] = {
    RevealState.IDLE: frozenset({RevealState.CHALLENGING}),
    RevealState.CHALLENGING: frozenset(
        {RevealState.AUTHORIZED, RevealState.DENIED, RevealState.IDLE}
    ),
    RevealState.AUTHORIZED: frozenset({RevealState.REVEALED, RevealState.IDLE}),
    RevealState.REVEALED: frozenset({RevealState.IDLE}),
    RevealState.DENIED: frozenset({RevealState.IDLE}),
}


def build_challenge(public_key_token: str, ledger_address: str, network_id: int) -> str:
    """Canonical challenge text. Field order and labels are fixed."""
    return (
        f"publickey:{public_key_token}\n"
        f"contractAddresses:{ledger_address}\n"
        f"contractsChainId:{network_id}"
    )


class RevealGate:
    """Signature-gated disclosure of one record at a time."""

    def __init__(
        self,
        session: Session,
        cipher: Optional[CipherAdapter] = None,
        audit_home: Optional[Path] = None,
    ):
        self.session = session
        self.cipher = cipher or PlaceholderCipher()
        self.audit_home = audit_home
        self.state = RevealState.IDLE
        self.record: Optional[Record] = None
        self.value: Optional[float] = None

    def _transition(self, target: RevealState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise InvalidTransition(f"Cannot go from {self.state.value} to {target.value}")
        logger.debug("Reveal gate: %s -> %s", self.state.value, target.value)
        self.state = target

    def _audit(self, event: AuditEvent, record: Record, note: str = "") -> None:
        if self.audit_home is not None:
            audit_event(
                self.audit_home,
                event,
                record.id,
                note,
                wallet=self.session.wallet_address,
                network_id=self.session.network_id,
            )

    def challenge(self) -> str:
        """The message the owner is asked to sign in this session."""
        return build_challenge(
            self.session.public_key_token,
            self.session.ledger_address,
            self.session.network_id,
        )

    async def reveal(self, record: Record) -> float:
        """Run a full attempt for ``record`` and return its plaintext.

        A value already on display is hidden first. A previous denial is
        cleared; it is never retried on its own.

        Raises:
            RevealDenied: If no wallet is connected, or signing is declined
                or fails.
            FormatError: If the sealed value cannot be opened.
        """
        if self.state == RevealState.REVEALED:
            self.hide()
        elif self.state == RevealState.DENIED:
            self._transition(RevealState.IDLE)

        if not self.session.is_connected:
            raise RevealDenied("Please connect wallet first")

        self._transition(RevealState.CHALLENGING)
        self.record = record
        try:
            await self.session.signer.sign_message(self.challenge())
        except asyncio.CancelledError:
            self.cancel()
            raise
        except Exception as exc:
            self._transition(RevealState.DENIED)
            self.record = None
            reason = str(exc) if isinstance(exc, SignatureRejected) else f"Signing failed: {exc}"
            logger.warning("Reveal of %s denied: %s", record.id, reason)
            self._audit(AuditEvent.REVEAL_DENIED, record, reason)
            raise RevealDenied(reason) from exc

        self._transition(RevealState.AUTHORIZED)
        self._audit(AuditEvent.REVEAL_AUTHORIZED, record)
        return self.open_authorized()

    def open_authorized(self) -> float:
        """Open the authorized record's value.

        Only valid right after a successful signature.

        Raises:
            InvalidTransition: If the gate is not AUTHORIZED.
            FormatError: If the sealed value cannot be opened.
        """
        if self.state != RevealState.AUTHORIZED or self.record is None:
            raise InvalidTransition(f"Cannot open a value while {self.state.value}")
        try:
            value = self.cipher.open(self.record.encrypted_value)
        except FormatError:
            self._transition(RevealState.IDLE)
            self.record = None
            raise
        self._transition(RevealState.REVEALED)
        self.value = value
        return value

    def hide(self) -> None:
        """Discard the plaintext. The session token is kept."""
        self._transition(RevealState.IDLE)
        self.value = None
        self.record = None

    def cancel(self) -> None:
        """Abandon a pending challenge."""
        if self.state == RevealState.CHALLENGING:
            self._transition(RevealState.IDLE)
            self.record = None
