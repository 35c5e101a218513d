"""Version parsing and comparison for catalog queries.

A version string is a dotted list of non-negative integers with an optional
prerelease tag on the final component, e.g. ``1.5.3-BETA``. Comparison is
numeric first; two versions that are numerically equal but carry different
tags compare as ``EQUALS_PRERELEASE_MISMATCH`` rather than ``EQUALS``.

Query qualifiers treat that relation asymmetrically: ``=`` accepts only an
exact match, while a bare version and the ``<=`` / ``>=`` ranges also accept
prerelease mismatches. So ``<=1.0.0`` and ``1.0.0`` match ``1.0.0-BETA``,
but ``=1.0.0`` does not.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from itertools import zip_longest

from pydantic import BaseModel, ConfigDict

from caryatid.errors import MalformedVersionError

logger = logging.getLogger(__name__)


class VersionComparator(str, Enum):
    """Relationship of one version to another."""

    EQUALS = "equals"
    EQUALS_PRERELEASE_MISMATCH = "equals_prerelease_mismatch"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"


def compare_int_sequences(
    left: Sequence[int], right: Sequence[int]
) -> VersionComparator:
    """Compare two integer vectors left to right.

    The shorter vector is padded with zeroes, so ``[1, 0]`` equals
    ``[1, 0, 0]``.
    """
    for lcomp, rcomp in zip_longest(left, right, fillvalue=0):
        if lcomp < rcomp:
            return VersionComparator.LESS_THAN
        if lcomp > rcomp:
            return VersionComparator.GREATER_THAN
    return VersionComparator.EQUALS


def _parse_component(component: str, text: str) -> int:
    if not (component.isascii() and component.isdigit()):
        raise MalformedVersionError(
            f"Could not decode component {component!r} from version string {text!r}"
        )
    return int(component)


class ComparableVersion(BaseModel):
    """Structured form of a version string, used only for comparison.

    Example: ``1.5.3-BETA`` -> ``ComparableVersion(version=(1, 5, 3), prerelease="BETA")``
    """

    model_config = ConfigDict(frozen=True)

    version: tuple[int, ...]
    prerelease: str = ""

    @classmethod
    def parse(cls, text: str) -> ComparableVersion:
        """Parse a version string.

        Raises
        ------
        MalformedVersionError
            If the string has more than one ``-``, a tag outside the final
            component, or any non-integer component.
        """
        if text.count("-") > 1:
            raise MalformedVersionError(
                f"Too many dash (-) characters in version {text!r}"
            )
        numeric, _, prerelease = text.partition("-")
        if "." in prerelease:
            raise MalformedVersionError(
                f"Prerelease tag must be on the final component of version {text!r}"
            )
        components = tuple(
            _parse_component(component, text) for component in numeric.split(".")
        )
        return cls(version=components, prerelease=prerelease)

    def compare(self, other: ComparableVersion) -> VersionComparator:
        """Return how this version relates to ``other``."""
        result = compare_int_sequences(self.version, other.version)
        if result == VersionComparator.EQUALS and self.prerelease != other.prerelease:
            return VersionComparator.EQUALS_PRERELEASE_MISMATCH
        return result

    def __str__(self) -> str:
        numeric = ".".join(str(component) for component in self.version)
        if self.prerelease:
            return f"{numeric}-{self.prerelease}"
        return numeric


# Accepted comparator sets per query qualifier. The empty qualifier is a bare
# version, e.g. "1.0.0".
QUALIFIER_COMPARATORS: dict[str, frozenset[VersionComparator]] = {
    "=": frozenset({VersionComparator.EQUALS}),
    "": frozenset({
        VersionComparator.EQUALS,
        VersionComparator.EQUALS_PRERELEASE_MISMATCH,
    }),
    "<": frozenset({VersionComparator.LESS_THAN}),
    ">": frozenset({VersionComparator.GREATER_THAN}),
    "<=": frozenset({
        VersionComparator.LESS_THAN,
        VersionComparator.EQUALS,
        VersionComparator.EQUALS_PRERELEASE_MISMATCH,
    }),
    ">=": frozenset({
        VersionComparator.GREATER_THAN,
        VersionComparator.EQUALS,
        VersionComparator.EQUALS_PRERELEASE_MISMATCH,
    }),
}

# Longest first, so ">=" is never read as ">" followed by "=1.0".
_QUALIFIER_PREFIXES = (">=", "<=", ">", "<", "=")


def parse_query_qualifier(
    text: str,
) -> tuple[ComparableVersion, frozenset[VersionComparator]]:
    """Split a version query like ``<=1.2.3`` into a version and accepted set."""
    qualifier = next(
        (prefix for prefix in _QUALIFIER_PREFIXES if text.startswith(prefix)), ""
    )
    version = ComparableVersion.parse(text[len(qualifier):])
    logger.debug(
        "Parsed version query %r into version %s and qualifier %r",
        text, version, qualifier,
    )
    return version, QUALIFIER_COMPARATORS[qualifier]
