from __future__ import annotations


class EthicsEngineError(Exception):
    """Base class for errors raised by the ethics engine."""


class PolicyConfigurationError(EthicsEngineError):
    """The policy supplied by the policy store cannot be applied."""


class ScreeningLookupError(EthicsEngineError):
    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Screening lookup failed for {name!r}: {reason}")
        self.name = name
        self.reason = reason


class ScreeningUnavailableError(EthicsEngineError):
    """Every screening lookup of an evaluation failed."""
