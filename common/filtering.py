"""Search, role filter and ordering for list payloads.

Lists are filtered after serialization, on plain dicts, so the same helpers
serve profiles, stores with aggregates and dashboard payloads.
"""

from rest_framework.exceptions import ValidationError

SORT_ORDERS = ("asc", "desc")


def parse_list_params(params, sort_fields, default_sort="name"):
    """Read `search`, `role`, `sort_by` and `sort_order` from query params.

    Raises ValidationError on unknown sort fields or orders.
    """
    sort_by = params.get("sort_by") or default_sort
    if sort_by not in sort_fields:
        raise ValidationError({"sort_by": f"Allowed values: {', '.join(sort_fields)}."})

    sort_order = (params.get("sort_order") or "asc").lower()
    if sort_order not in SORT_ORDERS:
        raise ValidationError({"sort_order": "Allowed values: asc, desc."})

    return {
        "search": (params.get("search") or "").strip(),
        "role": (params.get("role") or "").strip(),
        "sort_by": sort_by,
        "sort_order": sort_order,
    }


def _sort_key(value):
    if value is None:
        return (1, "")
    if isinstance(value, (int, float)):
        return (0, value)
    return (0, str(value).lower())


def filter_and_sort(rows, search="", search_fields=(), role="", sort_by=None, sort_order="asc"):
    """Case-insensitive substring search over `search_fields`, optional exact
    role match, then a stable sort on `sort_by`."""
    needle = search.lower()
    result = []
    for row in rows:
        if needle and not any(needle in str(row.get(f) or "").lower() for f in search_fields):
            continue
        if role and row.get("role") != role:
            continue
        result.append(row)

    if sort_by:
        result.sort(key=lambda r: _sort_key(r.get(sort_by)), reverse=(sort_order == "desc"))
    return result
