"""Feature gates attached to every node.

A ``Features`` value is a disjunction: the node it belongs to exists only when
at least one of the listed compile-time flags is enabled. The empty value means
the node is always present.

The same logical node may be declared more than once under nested feature
requirements. ``Features.join`` folds those declarations into a single value
and refuses requirements that do not nest.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class FeatureConflictError(AssertionError):
    """Two declarations of the same node carry feature sets that do not nest."""

    def __init__(self, left: Iterable[str], right: Iterable[str]) -> None:
        self.left = tuple(left)
        self.right = tuple(right)
        msg = (
            f"Feature sets {list(self.left)} and {list(self.right)} are not "
            "nested; one must contain the other"
        )
        super().__init__(msg)


@dataclass
class Features:
    """Ordered flag names. Membership matters, order is kept for output."""

    flags: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.flags, str):
            msg = f"Features expects a sequence of flag names, got str {self.flags!r}"
            raise TypeError(msg)
        self.flags = list(self.flags)

    def __len__(self) -> int:
        return len(self.flags)

    def __contains__(self, flag: object) -> bool:
        return any(f == flag for f in self.flags)

    def __iter__(self) -> Iterator[str]:
        return iter(self.flags)

    def __getitem__(self, index: int) -> str:
        """Return the flag at ``index``.

        Raises:
            IndexError: If ``index`` is not a valid position. Negative
                positions are rejected rather than counted from the end.

        """
        if not 0 <= index < len(self.flags):
            msg = f"Feature index {index} out of range for {len(self.flags)} flag(s)"
            raise IndexError(msg)
        return self.flags[index]

    def join(self, other: Features) -> None:
        """Merge ``other`` into this value, keeping the larger flag set.

        An empty value adopts ``other`` wholesale. Otherwise the side with
        fewer flags must be a subset of the other side; with equal counts
        both sides must contain each other and ``other`` wins.

        Raises:
            FeatureConflictError: If neither side contains the other.

        """
        if not self.flags:
            self.flags = list(other.flags)
        elif len(self) < len(other):
            if not _is_subset(self, other):
                raise FeatureConflictError(self, other)
            self.flags = list(other.flags)
        elif len(self) > len(other):
            if not _is_subset(other, self):
                raise FeatureConflictError(self, other)
        else:
            if not (_is_subset(other, self) and _is_subset(self, other)):
                raise FeatureConflictError(self, other)
            self.flags = list(other.flags)


def _is_subset(smaller: Features, larger: Features) -> bool:
    return all(flag in larger for flag in smaller)
