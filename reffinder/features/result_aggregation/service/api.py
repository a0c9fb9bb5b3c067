from typing import Iterable, List, Optional, Tuple

from reffinder.core.enums import SortDirection, SortKey
from reffinder.features.reference_detection.domain.models import ReferenceRecord

from ..domain.models import ResultFilter


def sort_records(records: Iterable[ReferenceRecord],
                 key: SortKey = SortKey.PATH,
                 direction: SortDirection = SortDirection.ASCENDING) -> List[ReferenceRecord]:
    """
    Returns a sorted copy.

    PATH compares code points (ordinal, not locale-aware).
    REF_COUNT is numeric, so the -1 "unknown" sentinel is lowest when ascending.
    The sort is stable: equal keys keep their insertion order in both directions.
    """
    if key == SortKey.PATH:
        sort_key = lambda record: record.path
    elif key == SortKey.REF_COUNT:
        sort_key = lambda record: record.ref_count
    else:
        raise ValueError(f"Unsupported sort key: {key}")

    return sorted(records, key=sort_key, reverse=(direction == SortDirection.DESCENDING))


def toggle_sort(current_key: SortKey, current_direction: SortDirection,
                clicked_key: SortKey) -> Tuple[SortKey, SortDirection]:
    """
    Column-header behaviour: clicking the active column flips the direction,
    clicking another column selects it in ascending order.
    """
    if clicked_key == current_key:
        flipped = (SortDirection.DESCENDING if current_direction == SortDirection.ASCENDING
                   else SortDirection.ASCENDING)
        return current_key, flipped
    return clicked_key, SortDirection.ASCENDING


def filter_records(records: Iterable[ReferenceRecord],
                   result_filter: Optional[ResultFilter] = None) -> List[ReferenceRecord]:
    """
    Derived view of the records matching the filter. The input is left untouched;
    callers re-request the view whenever a filter control changes.
    """
    if result_filter is None:
        return list(records)
    return [record for record in records if result_filter.matches(record.path)]


def describe_results(total: int, filtered: int, result_filter: Optional[ResultFilter] = None) -> str:
    """Status line shown under the result table."""
    if result_filter is not None and result_filter.is_active:
        return f"Total {total} result(s) found, {filtered} result(s) left after filtering."
    return f"Total {total} result(s) found."
