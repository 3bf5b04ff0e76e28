"""Shared test fixtures for extkit."""

from __future__ import annotations

from pathlib import Path

import pytest

from extkit.errors import SignatureRejected
from extkit.ledger import MemoryLedger
from extkit.orchestrator import SyncOrchestrator
from extkit.session import Session
from extkit.signers import MessageSigner

LEDGER_ADDRESS = "0xC0FFEE0000000000000000000000000000000001"
NETWORK_ID = 31337
WALLET = "0xA11CE00000000000000000000000000000000002"


class FakeSigner(MessageSigner):
    """Records every message; approves unless told to reject."""

    def __init__(self, reject: bool = False):
        self.reject = reject
        self.messages: list[str] = []

    async def sign_message(self, message: str) -> str:
        self.messages.append(message)
        if self.reject:
            raise SignatureRejected("User rejected the signature request")
        return "sig:" + str(len(message))


@pytest.fixture
def tmp_home(tmp_path: Path) -> Path:
    """Provide a temporary extkit home directory."""
    home = tmp_path / ".extkit"
    home.mkdir()
    return home


@pytest.fixture
def ledger() -> MemoryLedger:
    return MemoryLedger(address=LEDGER_ADDRESS, network_id=NETWORK_ID)


@pytest.fixture
def signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture
def session(signer: FakeSigner) -> Session:
    """A connected session, built without touching the ledger."""
    return Session(
        ledger_address=LEDGER_ADDRESS,
        network_id=NETWORK_ID,
        signer=signer,
        wallet_address=WALLET,
    )


@pytest.fixture
def orchestrator(ledger: MemoryLedger, session: Session) -> SyncOrchestrator:
    return SyncOrchestrator(ledger, session)


@pytest.fixture
def signer_cls() -> type[FakeSigner]:
    """The fake signer class, for tests that need a second signer."""
    return FakeSigner
