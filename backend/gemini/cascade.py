"""
Model resolution cascade.

Gets one completion out of Gemini even when individual model names are
retired, renamed or rate-limited:

  1. discover models the key can use (failure -> static fallback list)
  2. order them: priority names first, then the rest in discovery order
  3. try every (api_version, model) pair over REST
  4. if nothing answered, try the same pairs through the SDK
  5. otherwise raise QuotaExceededError (some attempt was rate-limited)
     or UnavailableError (with the attempt summary)

An invalid or leaked key aborts at the first attempt that reports it.
Attempts are strictly sequential: each outcome decides whether the next
one happens at all.
"""

import logging
from typing import Optional, Sequence

from gemini import config
from gemini.candidates import expand_candidates, order_model_names
from gemini.errors import QuotaExceededError, UnavailableError
from gemini.fallback import Attempt, CompletionMechanism, run_chain
from gemini.outcomes import ModelCandidate, RateLimited
from gemini.system_prompt import build_prompt
from models.chat import ChatMessage

logger = logging.getLogger(__name__)


class ModelResolutionCascade:
    def __init__(
        self,
        primary: CompletionMechanism,
        secondary: Optional[CompletionMechanism] = None,
        *,
        priority_models: Optional[Sequence[str]] = None,
        fallback_models: Optional[Sequence[str]] = None,
        api_versions: Optional[Sequence[str]] = None,
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self.priority_models = list(
            config.GEMINI_PRIORITY_MODELS if priority_models is None else priority_models
        )
        self.fallback_models = list(
            config.GEMINI_FALLBACK_MODELS if fallback_models is None else fallback_models
        )
        self.api_versions = list(
            config.GEMINI_API_VERSIONS if api_versions is None else api_versions
        )

    def close(self) -> None:
        for mechanism in (self.primary, self.secondary):
            close = getattr(mechanism, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> "ModelResolutionCascade":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _discover(self) -> list[str]:
        discover = getattr(self.primary, "discover_models", None)
        if not callable(discover):
            return []
        try:
            return list(discover())
        except Exception as exc:
            logger.warning("Model discovery raised, using fallback list: %s", exc)
            return []

    def candidates(self) -> list[ModelCandidate]:
        discovered = self._discover()
        names = order_model_names(discovered, self.priority_models, self.fallback_models)
        if discovered:
            logger.info("Found %d available models, trying: %s", len(discovered), names)
        else:
            logger.info("Could not fetch model list, using fallback names: %s", names)
        return expand_candidates(names, self.api_versions)

    def resolve(self, message: str, history: Sequence[ChatMessage] = ()) -> str:
        """
        Return the first successful completion for `message`.

        Raises:
            ConfigurationError: the key was rejected (invalid or leaked)
            QuotaExceededError: nothing answered and at least one model was
                rate-limited
            UnavailableError: nothing answered for any other reason
        """
        prompt = build_prompt(message, history)
        candidates = self.candidates()
        attempts: list[Attempt] = []

        mechanisms = [self.primary]
        if self.secondary is not None:
            mechanisms.append(self.secondary)

        for mechanism in mechanisms:
            text = run_chain(mechanism, candidates, prompt, attempts)
            if text is not None:
                return text
            logger.warning(
                "All %s attempts failed (%d candidates)", mechanism.name, len(candidates)
            )

        summary = [str(a) for a in attempts]
        logger.error("Model cascade exhausted:\n  - %s", "\n  - ".join(summary) or "none")

        if any(isinstance(a.outcome, RateLimited) for a in attempts):
            raise QuotaExceededError()
        raise UnavailableError(summary)
