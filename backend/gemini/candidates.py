"""Candidate ordering for the model cascade."""

from typing import Iterable, Sequence

from gemini.outcomes import ModelCandidate


def order_model_names(
    discovered: Sequence[str],
    priority: Sequence[str],
    fallback: Sequence[str],
) -> list[str]:
    """
    Deterministic model order.

    With a non-empty discovery result: every priority name in its fixed
    order, then each discovered name not already listed, in discovery order.
    Without one: the static fallback list. Duplicates are always dropped.
    """
    if discovered:
        names = list(priority) + [name for name in discovered if name not in priority]
    else:
        names = list(fallback)
    return list(dict.fromkeys(name for name in names if name))


def expand_candidates(
    names: Iterable[str],
    api_versions: Sequence[str],
) -> list[ModelCandidate]:
    """Cross model names with API versions, version-major (all of v1beta first)."""
    names = list(names)
    return [
        ModelCandidate(name=name, api_version=version)
        for version in api_versions
        for name in names
    ]
