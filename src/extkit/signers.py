"""
Message signers -- the owner's wallet, as far as extkit is concerned.

A signer receives the exact challenge text and either returns a signature
or raises ``SignatureRejected``. The GPG signer shells out to the local
gpg binary with the owner's key; the optional ``confirm`` callback lets a
front end ask the owner before anything is signed.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .errors import SignatureRejected

logger = logging.getLogger("extkit.signers")


class MessageSigner(ABC):
    """Signs challenge messages on behalf of the wallet owner."""

    @abstractmethod
    async def sign_message(self, message: str) -> str:
        """Sign ``message`` exactly as given.

        Raises:
            SignatureRejected: If the owner declines or signing fails.
        """


class GpgSigner(MessageSigner):
    """Detached ASCII-armored signatures via the system gpg."""

    def __init__(
        self,
        key_id: str,
        confirm: Optional[Callable[[str], bool]] = None,
        timeout: int = 15,
    ):
        self.key_id = key_id
        self.confirm = confirm
        self.timeout = timeout

    def _sign(self, message: str) -> str:
        if not shutil.which("gpg"):
            raise SignatureRejected("gpg not found in PATH")

        cmd = [
            "gpg", "--batch", "--yes", "--armor", "--detach-sign",
            "--local-user", self.key_id,
        ]
        try:
            result = subprocess.run(
                cmd,
                input=message,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise SignatureRejected(f"GPG signing timed out: {exc}") from exc
        except OSError as exc:
            raise SignatureRejected(f"Could not run gpg: {exc}") from exc

        if result.returncode != 0:
            logger.warning("GPG signing failed: %s", result.stderr.strip())
            raise SignatureRejected(result.stderr.strip() or "GPG signing failed")
        return result.stdout

    async def sign_message(self, message: str) -> str:
        if self.confirm is not None and not self.confirm(message):
            raise SignatureRejected("User rejected the signature request")
        return await asyncio.to_thread(self._sign, message)
