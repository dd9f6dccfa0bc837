"""Record filters applied before series are charted."""

from collections.abc import Iterable, Sequence

from chartprep.series.base import Record


def filter_by_segment(
    records: Sequence[Record] | None,
    segments: Iterable[str],
    field: str = "market_segment",
) -> Sequence[Record] | None:
    """
    Keep records whose ``field`` is one of ``segments``.

    ``segments`` may be any iterable of names, including a mapping keyed by
    segment name. With no records or no segments selected the input is
    returned as is.
    """
    allowed = set(segments)
    if records is None or not allowed:
        return records
    return [record for record in records if record.get(field) in allowed]
