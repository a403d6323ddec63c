"""
Shared fallback chain runner.

run_chain() tries each candidate through one mechanism, in order:
  - Success     -> returned immediately, nothing else is tried
  - InvalidKey  -> ConfigurationError raised immediately
  - anything else is recorded in the attempt log and the next candidate runs

Returns None only if every candidate failed with a non-fatal outcome.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from gemini.errors import invalid_key_error
from gemini.outcomes import (
    CallOutcome,
    ModelCandidate,
    RateLimited,
    Success,
    describe,
    is_fatal,
)

logger = logging.getLogger(__name__)


class CompletionMechanism(Protocol):
    name: str

    def generate(self, candidate: ModelCandidate, prompt: str) -> CallOutcome: ...


@dataclass(frozen=True)
class Attempt:
    mechanism: str
    candidate: ModelCandidate
    outcome: CallOutcome

    def __str__(self) -> str:
        return f"{self.mechanism} {self.candidate}: {describe(self.outcome)}"


def run_chain(
    mechanism: CompletionMechanism,
    candidates: Sequence[ModelCandidate],
    prompt: str,
    attempts: list[Attempt],
) -> Optional[str]:
    """
    Try `candidates` through `mechanism`, first success wins.

    Every failed attempt is appended to `attempts` so the caller can build a
    terminal error from the whole history across mechanisms.
    """
    for candidate in candidates:
        outcome = mechanism.generate(candidate, prompt)

        if isinstance(outcome, Success):
            logger.info("%s %s answered", mechanism.name, candidate)
            return outcome.text

        attempt = Attempt(mechanism.name, candidate, outcome)
        attempts.append(attempt)

        if is_fatal(outcome):
            logger.error("%s; aborting model cascade", attempt)
            raise invalid_key_error(outcome.leaked)

        if isinstance(outcome, RateLimited):
            logger.info("%s (trying next in chain)", attempt)
        else:
            logger.info("%s", attempt)

    return None
