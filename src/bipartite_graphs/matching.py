"""
Partial injective matching between destination and source vertices.

A Matching is indexed by destination id. Each entry is either the id of the
matched source, the ``unassigned`` marker, or an arbitrary non-integer
payload that also counts as unassigned (callers use payloads to record why a
destination was left unmatched). An optional inverse table, indexed by
source id, mirrors the pairing in the opposite direction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Iterator, Optional, Union

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import MatchEntry, is_matched, unassigned
from .validation import NotCompletedError, VertexOutOfRangeError


class Matching:
    """
    Mapping from destination ids to source ids.

    Invariant when ``inv_match`` is present: ``match[d - 1] == s`` iff
    ``inv_match[s - 1] == d``, every other entry is unassigned.

    Attributes:
        match: Entries per destination (``match[d - 1]``)
        inv_match: Entries per source, or None if the matching is not complete

    Example:
        >>> m = Matching(3)
        >>> m[1] = 2
        >>> m.complete()[1]
        2
        >>> m.invview()[2]
        1
    """

    __slots__ = ("match", "inv_match")

    def __init__(
        self,
        entries: Union[int, list[MatchEntry]],
        inv_match: Optional[list[MatchEntry]] = None,
    ) -> None:
        """
        Create a matching.

        Args:
            entries: Number of destinations (all unassigned), or an existing
                entry list. A list is used as-is, not copied.
            inv_match: Existing inverse list, used as-is
        """
        if isinstance(entries, int):
            entries = [unassigned] * entries
        self.match: list[MatchEntry] = entries
        self.inv_match: Optional[list[MatchEntry]] = inv_match

    # -------------------------------------------------------------------------
    # Sequence protocol (1-based)
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.match)

    def __iter__(self) -> Iterator[MatchEntry]:
        return iter(self.match)

    def __getitem__(self, d: int) -> MatchEntry:
        if not 1 <= d <= len(self.match):
            raise VertexOutOfRangeError(f"destination {d} out of range [1, {len(self.match)}]")
        return self.match[d - 1]

    def get(self, d: int, default: Any = unassigned) -> MatchEntry:
        """Entry for destination ``d``, or ``default`` when ``d`` lies beyond the table."""
        if 1 <= d <= len(self.match):
            return self.match[d - 1]
        return default

    def __setitem__(self, d: int, v: MatchEntry) -> None:
        """
        Assign source ``v`` (or an unassigned payload) to destination ``d``.

        With an inverse present the pairing stays injective: a destination
        already holding ``v`` is unassigned, the previous source of ``d`` loses
        its inverse entry, and the inverse grows to fit ``v``.
        """
        if not 1 <= d <= len(self.match):
            raise VertexOutOfRangeError(f"destination {d} out of range [1, {len(self.match)}]")
        if is_matched(v):
            v = int(v)
            if v < 1:
                raise VertexOutOfRangeError(f"source {v} must be a positive id")

        inv = self.inv_match
        if inv is not None:
            oldv = self.match[d - 1]
            # oldv is read before eviction: the evicted destination may be d itself.
            if is_matched(v) and v <= len(inv):
                iv = inv[v - 1]
                if is_matched(iv):
                    self.match[iv - 1] = unassigned
            if is_matched(oldv) and oldv <= len(inv) and inv[oldv - 1] == d:
                inv[oldv - 1] = unassigned
            if is_matched(v):
                if v > len(inv):
                    inv.extend([unassigned] * (v - len(inv)))
                inv[v - 1] = d
        self.match[d - 1] = v

    def push(self, v: MatchEntry) -> None:
        """Append an entry for a new destination, keeping the inverse in sync."""
        if is_matched(v):
            v = int(v)
        self.match.append(v)
        inv = self.inv_match
        if inv is not None and is_matched(v):
            if v > len(inv):
                inv.extend([unassigned] * (v - len(inv)))
            iv = inv[v - 1]
            if is_matched(iv):
                self.match[iv - 1] = unassigned
            inv[v - 1] = len(self.match)

    # -------------------------------------------------------------------------
    # Completion and views
    # -------------------------------------------------------------------------

    @property
    def is_complete(self) -> bool:
        """True if the inverse table is stored."""
        return self.inv_match is not None

    def complete(self, n: Optional[int] = None) -> Self:
        """
        Build the inverse table in place, if not already stored.

        Args:
            n: Length of the inverse table (default: the largest assigned source)

        Returns:
            The matching itself

        Raises:
            VertexOutOfRangeError: If an assigned source exceeds ``n``
        """
        if self.inv_match is not None:
            return self
        if n is None:
            n = max((s for s in self.match if is_matched(s)), default=0)
        inv: list[MatchEntry] = [unassigned] * n
        for d, s in enumerate(self.match, start=1):
            if not is_matched(s):
                continue
            if s > n:
                raise VertexOutOfRangeError(
                    f"source {s} matched to destination {d} exceeds inverse size {n}"
                )
            inv[s - 1] = d
        self.inv_match = inv
        return self

    def require_complete(self) -> None:
        """Raise NotCompletedError if the inverse table is absent."""
        if self.inv_match is None:
            raise NotCompletedError(
                "Backwards matching not defined. `complete` the matching first."
            )

    def invview(self) -> Matching:
        """
        Return a view indexed by source id, sharing storage with this matching.

        Raises:
            NotCompletedError: If the matching is not complete
        """
        self.require_complete()
        assert self.inv_match is not None
        return Matching(self.inv_match, self.match)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def matched_pairs(self) -> Iterator[tuple[int, int]]:
        """Yield ``(dst, src)`` for every assigned destination."""
        for d, s in enumerate(self.match, start=1):
            if is_matched(s):
                yield d, s

    @property
    def cardinality(self) -> int:
        """Number of assigned destinations."""
        return sum(1 for s in self.match if is_matched(s))

    def copy(self) -> Matching:
        return Matching(
            list(self.match),
            None if self.inv_match is None else list(self.inv_match),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matching):
            return NotImplemented
        return self.match == other.match

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matching({self.match!r})"

    @classmethod
    def from_pairs(cls, n: int, pairs: Iterable[tuple[int, int]]) -> Matching:
        """Build a matching of ``n`` destinations from ``(dst, src)`` pairs."""
        m = cls(n)
        for d, s in pairs:
            m[d] = s
        return m


__all__ = ["Matching"]
