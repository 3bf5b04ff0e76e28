"""
Session context -- the state one owner's session carries.

The public-key-like token, the ledger address and the network id are
fixed when the session starts and shared by the reveal gate and the
orchestrator. Ending the session clears the token and the wallet.
"""

from __future__ import annotations

import logging
import secrets
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from .ledger.client import LedgerClient
from .signers import MessageSigner

logger = logging.getLogger("extkit.session")

TOKEN_HEX_CHARS = 2000


def generate_public_key_token() -> str:
    """Random ``0x``-prefixed hex string shaped like a public key.

    This is NOT a key. Nothing is derived from it.
    """
    return "0x" + secrets.token_hex(TOKEN_HEX_CHARS // 2)


class Session:
    """Explicit per-session context."""

    def __init__(
        self,
        ledger_address: str,
        network_id: int,
        signer: Optional[MessageSigner] = None,
        wallet_address: Optional[str] = None,
        public_key_token: Optional[str] = None,
    ):
        self.ledger_address = ledger_address
        self.network_id = network_id
        self.signer = signer
        self.wallet_address = wallet_address
        self.public_key_token = public_key_token or generate_public_key_token()
        self.active = True

    @classmethod
    async def start(
        cls,
        ledger: LedgerClient,
        signer: Optional[MessageSigner] = None,
        wallet_address: Optional[str] = None,
    ) -> "Session":
        """Open a session against ``ledger``, reading its address and network."""
        session = cls(
            ledger_address=await ledger.self_address(),
            network_id=await ledger.network_id(),
            signer=signer,
            wallet_address=wallet_address,
        )
        logger.debug(
            "Session started on network %s (ledger %s)",
            session.network_id,
            session.ledger_address,
        )
        return session

    @property
    def is_connected(self) -> bool:
        """True while a wallet and a signer are attached to a live session."""
        return self.active and self.wallet_address is not None and self.signer is not None

    def end(self) -> None:
        """Tear the session down. The token is not reusable afterwards."""
        self.active = False
        self.public_key_token = ""
        self.wallet_address = None
        self.signer = None
        logger.debug("Session ended")


@asynccontextmanager
async def session_scope(
    ledger: LedgerClient,
    signer: Optional[MessageSigner] = None,
    wallet_address: Optional[str] = None,
) -> AsyncIterator[Session]:
    """Async context manager that starts a session and always ends it."""
    session = await Session.start(ledger, signer=signer, wallet_address=wallet_address)
    try:
        yield session
    finally:
        session.end()
