"""
Key-based merge of several ascending time series into one.

The longest input series is the spine: its length and order define the
output. Every other series is aligned onto it right to left through a
``MatchWindow`` whose boundary only ever moves left, so each side series
costs at most one pass over the spine instead of a full cross-product.

Side records that find no partner in the remaining window are dropped,
never appended.
"""

from collections.abc import Sequence
from typing import Any

from chartprep.series.base import InvalidInputError, Record, TimeSeries
from chartprep.utils.logging import get_logger

log = get_logger(__name__)

_MISSING = object()


def _same_key(candidate: Any, value: Any) -> bool:
    # An absent key equals only another absent key, never a stored None
    if candidate is _MISSING or value is _MISSING:
        return candidate is value
    return bool(candidate == value)


class MatchWindow:
    """
    Shrinking search window over the spine for one side series.

    The window covers spine indices ``0..boundary``. Searches scan leftward
    from the boundary and the boundary can only decrease; once it drops
    below zero the window is exhausted.
    """

    def __init__(self, spine: TimeSeries, key: str) -> None:
        self._spine = spine
        self._key = key
        self._boundary = len(spine) - 1

    @property
    def boundary(self) -> int:
        """Highest spine index still open for matching."""
        return self._boundary

    @property
    def exhausted(self) -> bool:
        """True once no spine index is left to match against."""
        return self._boundary < 0

    def move_to(self, index: int) -> None:
        """
        Move the boundary to ``index``.

        Raises:
            ValueError: If ``index`` lies right of the current boundary.
        """
        if index > self._boundary:
            msg = (
                f"Match window cannot grow: boundary {self._boundary}, "
                f"requested {index}"
            )
            raise ValueError(msg)
        self._boundary = max(index, -1)

    def find_record(self, record: Record) -> int | None:
        """Scan leftward for the spine record sharing ``record``'s key."""
        return self.find(record.get(self._key, _MISSING))

    def find(self, value: Any) -> int | None:
        """
        Scan leftward from the boundary for a spine record keyed ``value``.

        The boundary follows the scan. On a match it rests on the matched
        index; otherwise the window ends up exhausted. Searching for a
        record that lacks the key matches only spine records that lack it
        too.

        Returns:
            Spine index of the match, or None.
        """
        while self._boundary >= 0:
            candidate = self._spine[self._boundary].get(self._key, _MISSING)
            if _same_key(candidate, value):
                return self._boundary
            self._boundary -= 1
        return None

    def consume(self, index: int) -> None:
        """Close the window at a matched index so it is not matched again."""
        self.move_to(index - 1)


def select_spine(series_list: Sequence[TimeSeries]) -> int:
    """
    Pick the index of the longest series.

    On equal length the earliest series wins.

    Raises:
        InvalidInputError: If ``series_list`` is empty.
    """
    if not series_list:
        msg = "Cannot merge an empty list of series"
        raise InvalidInputError(msg)

    longest = 0
    for i in range(1, len(series_list)):
        if len(series_list[longest]) < len(series_list[i]):
            longest = i
    return longest


def _align_onto(spine: list[Record], side: TimeSeries, key: str) -> int:
    """Overlay matching side records onto the spine; return how many were dropped."""
    window = MatchWindow(spine, key)

    for position in range(len(side) - 1, -1, -1):
        record = side[position]
        match = window.find_record(record)
        if match is None:
            # Everything left of here is earlier still and cannot match
            return position + 1

        spine[match] = {**spine[match], **record}
        window.consume(match)

    return 0


def merge_by_key(series_list: Sequence[TimeSeries], key: str) -> list[Record]:
    """
    Merge several ascending time series by a shared key field.

    The longest series is copied and used as the structural spine. Each
    other series is aligned onto it: a side record whose ``key`` value
    equals that of a spine record is merged into it (side fields win on
    collision). Matching runs right to left and never revisits spine
    positions right of the previous match, so a side record with no
    partner in the remaining window ends the alignment of that series.

    Neither ``series_list`` nor any series in it is modified.

    Args:
        series_list: Non-empty sequence of series sorted ascending.
        key: Field compared for equality between records.

    Returns:
        New list with the spine's length and order.

    Raises:
        InvalidInputError: If ``series_list`` is empty.
    """
    spine_index = select_spine(series_list)
    spine = list(series_list[spine_index])
    sides = [s for i, s in enumerate(series_list) if i != spine_index]

    total_dropped = 0
    for side in sides:
        total_dropped += _align_onto(spine, side, key)

    log.debug(
        "Merged series",
        key=key,
        n_series=len(series_list),
        spine_length=len(spine),
        dropped=total_dropped,
    )
    return spine
