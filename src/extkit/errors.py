"""
Error taxonomy for the catalog core.

Per-item errors (DecodeError, FormatError) are recoverable by skipping
the single affected item. Nothing here is fatal to the orchestrator.
"""

from __future__ import annotations


class ExtkitError(Exception):
    """Base class for every error raised by extkit."""


class ConfigError(ExtkitError):
    """Raised when the configuration file cannot be loaded."""


class LedgerUnavailable(ExtkitError):
    """Raised when the ledger reports itself not ready."""


class LedgerRejected(ExtkitError):
    """Raised when a ledger write is declined or fails in transit."""


class LedgerReadError(ExtkitError):
    """Raised when a single key cannot be read from an otherwise ready ledger."""


class DecodeError(ExtkitError):
    """Raised when a stored payload is malformed or partially written."""


class FormatError(ExtkitError):
    """Raised when a sealed value cannot be reversed."""


class SignatureRejected(ExtkitError):
    """Raised by a signer when the owner declines or the signature fails."""


class RevealDenied(ExtkitError):
    """Raised when the reveal challenge was not signed."""


class InvalidTransition(ExtkitError):
    """Raised on an illegal reveal gate state change."""


class SubmitError(ExtkitError):
    """Raised when a submission fails.

    The message is meant for humans: it is shown as-is by the CLI.
    """
