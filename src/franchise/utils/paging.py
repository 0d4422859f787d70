"""Exhaustive reads over Protean query sets.

A query set without an explicit limit is capped at the element's default
page size, so full reads walk the results page by page.
"""

PAGE_SIZE = 100


def fetch_all(query, page_size: int = PAGE_SIZE) -> list:
    """Return every item matched by ``query``. The query must carry an ordering."""
    items = []
    offset = 0
    while True:
        page = query.offset(offset).limit(page_size).all().items
        items.extend(page)
        if len(page) < page_size:
            return items
        offset += page_size
