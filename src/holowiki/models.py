"""Pydantic models for queued wiki queries."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Scalar = Union[bool, int, float, str]
ParamValue = Union[Scalar, List[Scalar]]

# Set by the transport on every call.
RESERVED_PARAMS = frozenset({"action", "format"})

# Parameters MediaWiki accepts as ``|``-separated lists. Any ``*prop`` key
# (``rvprop``, ``inprop``, ``clprop``...) is a list as well.
MULTI_VALUE_PARAMS = frozenset({"titles", "pageids", "revids", "prop", "list", "meta"})


def is_multi_value(key: str) -> bool:
    return key in MULTI_VALUE_PARAMS or key.endswith("prop")


class QueryRequest(BaseModel):
    """One caller's share of a batched ``action=query`` call."""

    model_config = ConfigDict(frozen=True)

    params: Dict[str, ParamValue] = Field(default_factory=dict)

    @field_validator("params")
    @classmethod
    def _no_reserved_keys(cls, value: Dict[str, ParamValue]) -> Dict[str, ParamValue]:
        reserved = RESERVED_PARAMS.intersection(value)
        if reserved:
            raise ValueError(f"params may not set {', '.join(sorted(reserved))}")
        return value

    def values_for(self, key: str) -> List[str]:
        return _split(self.params[key])

    def single_values(self) -> Dict[str, str]:
        """Rendered values of the parameters that cannot be unioned."""
        singles: Dict[str, str] = {}
        for key in self.params:
            if is_multi_value(key):
                continue
            parts = self.values_for(key)
            if parts:
                singles[key] = "|".join(parts)
        return singles

    def conflicts_with(self, singles: Mapping[str, str]) -> bool:
        """True when a single-value parameter disagrees with ``singles``."""
        return any(key in singles and singles[key] != value for key, value in self.single_values().items())


def _render(value: Scalar) -> str:
    if isinstance(value, bool):
        return "1"
    return str(value)


def _split(value: ParamValue) -> List[str]:
    if isinstance(value, bool) and not value:
        return []
    items = value if isinstance(value, list) else [value]
    parts: List[str] = []
    for item in items:
        if isinstance(item, bool) and not item:
            continue
        parts.extend(part for part in _render(item).split("|") if part)
    return parts


def split_compatible(requests: Iterable[QueryRequest]) -> tuple[List[int], List[int]]:
    """Partition requests, by index, into those that can share one call and the rest.

    Requests are taken in order; one whose single-value parameter disagrees
    with an earlier taken request is left for a later call.
    """
    taken: List[int] = []
    deferred: List[int] = []
    singles: Dict[str, str] = {}
    for index, request in enumerate(requests):
        if request.conflicts_with(singles):
            deferred.append(index)
            continue
        singles.update(request.single_values())
        taken.append(index)
    return taken, deferred


def merge_params(requests: Iterable[QueryRequest]) -> Dict[str, str]:
    """Combine the parameters of several requests into one query string map.

    MediaWiki accepts multiple values for list parameters separated by ``|``,
    so those are unioned in submission order. Other parameters must agree
    across the batch; use :func:`split_compatible` to build such a batch.
    """
    merged: Dict[str, List[str]] = {}
    for request in requests:
        for key in request.params:
            parts = request.values_for(key)
            if not is_multi_value(key):
                if not parts:
                    continue
                value = "|".join(parts)
                if key in merged and "|".join(merged[key]) != value:
                    raise ValueError(f"Conflicting values for single-value parameter {key!r}")
                merged[key] = parts
                continue
            bucket = merged.setdefault(key, [])
            for part in parts:
                if part not in bucket:
                    bucket.append(part)
    return {key: "|".join(values) for key, values in merged.items() if values}


__all__ = ["MULTI_VALUE_PARAMS", "QueryRequest", "RESERVED_PARAMS", "is_multi_value", "merge_params", "split_compatible"]
