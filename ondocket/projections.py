"""
Timeline and archive projections of the collection
"""
from collections import namedtuple
from datetime import datetime

from ondocket.constants import ORDER_ASC, ORDER_DESC, TYPE_FILTER_ALL
from ondocket.dates import days_until, is_upcoming, parse_date

# index is the record's position in the full collection, used to address edit/delete
ProjectedRecord = namedtuple('ProjectedRecord', ['index', 'record'])


def normalize_order(value, default):
    if value in (ORDER_ASC, ORDER_DESC):
        return value
    return default


def _date_key(item):
    # Missing or unparsable dates sort as the oldest
    return parse_date(item.record.publication_date) or datetime.min


def _type_rank(item):
    return 0 if item.record.is_primary else 1


def _sort_by_date(items, order):
    # Both sorts are stable: exact date ties keep primary first, then file order
    items = sorted(items, key=_type_rank)
    return sorted(items, key=_date_key, reverse=(order == ORDER_DESC))


def _matches_type(record, type_filter):
    return type_filter == TYPE_FILTER_ALL or record.type == type_filter


def _matches_search(record, search):
    term = (search or "").lower()
    for value in (record.post_title, record.case, record.description):
        if value is not None and term in value.lower():
            return True
    return False


def project_upcoming(records, today=None, order=ORDER_ASC, type_filter=TYPE_FILTER_ALL):
    """
    Records due within the upcoming window, soonest first by default.

    Same-day records are not part of the window (see dates.is_upcoming).
    """
    items = [
        ProjectedRecord(index, record)
        for index, record in enumerate(records)
        if record.publication_date
        and is_upcoming(record.publication_date, today)
        and _matches_type(record, type_filter)
    ]
    return _sort_by_date(items, order)


def project_archive(records, today=None, order=ORDER_DESC, search="", type_filter=TYPE_FILTER_ALL):
    """
    Records published today or earlier, latest first by default.

    Search is a case-insensitive substring match on title, case and
    description; a record matches when any one of them contains the term.
    Records without a usable date count as published.
    """
    items = [
        ProjectedRecord(index, record)
        for index, record in enumerate(records)
        if days_until(record.publication_date, today) <= 0
        and _matches_search(record, search)
        and _matches_type(record, type_filter)
    ]
    return _sort_by_date(items, order)


def available_types(records):
    """Distinct non-empty types in first-seen order"""
    seen = []
    for record in records:
        if record.type and record.type not in seen:
            seen.append(record.type)
    return seen
