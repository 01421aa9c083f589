from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Protocol

import structlog
from pydantic import ValidationError

from ethics_engine.errors import PolicyConfigurationError
from ethics_engine.policy.models import PolicyConfig

if TYPE_CHECKING:
    from pathlib import Path

logger = structlog.get_logger(__name__)


class PolicyStore(Protocol):
    def read_policy(self) -> PolicyConfig: ...


class StaticPolicyStore:
    def __init__(self, policy: PolicyConfig | None = None) -> None:
        self.policy = policy or PolicyConfig()

    def read_policy(self) -> PolicyConfig:
        return self.policy


class FilePolicyStore:
    """Reads a JSON policy document on every call.

    The file owns freshness: edits are picked up by the next evaluation.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def read_policy(self) -> PolicyConfig:
        try:
            raw: Any = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Cannot read policy file {self.path}: {exc}"
            raise PolicyConfigurationError(msg) from exc

        policy = parse_policy(raw)
        logger.debug("policy_loaded", path=str(self.path), version=policy.version)
        return policy


def parse_policy(raw: Any) -> PolicyConfig:
    if not isinstance(raw, dict):
        msg = "Policy document must be a JSON object"
        raise PolicyConfigurationError(msg)
    try:
        return PolicyConfig.model_validate(raw)
    except ValidationError as exc:
        msg = f"Invalid policy: {exc}"
        raise PolicyConfigurationError(msg) from exc
