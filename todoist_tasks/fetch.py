"""
Fetch policy for list tasks

FETCH returns everything, FETCH_ONE returns the first item, STORE writes the
items to internal storage and returns the URI. The mode is picked once per
run; count is always the number of items Todoist returned.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .constants import RECORD_FILE_SUFFIX
from .context import RunContext
from .models import FetchType
from .serde import write_records

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Shape-neutral result; each list task maps it onto its own output"""
    count: int
    items: Optional[List[Dict[str, Any]]] = None
    item: Optional[Dict[str, Any]] = None
    uri: Optional[str] = None


def apply_fetch_type(
    context: RunContext,
    records: List[Dict[str, Any]],
    fetch_type: FetchType,
    label: str = "items",
) -> FetchResult:
    """
    Shape a fetched collection according to fetch_type.

    Args:
        context: Run context (logger, working directory, storage)
        records: Items returned by Todoist, in API order
        fetch_type: FETCH, FETCH_ONE or STORE
        label: Plural noun used in log messages ("tasks", "projects")

    Returns:
        FetchResult with exactly one of items/item/uri set
        (item stays None for FETCH_ONE on an empty collection)
    """
    if fetch_type == FetchType.FETCH_ONE:
        if not records:
            context.logger.warning(f"No {label} found, returning null")
            return FetchResult(count=0)
        context.logger.debug(f"Returning first of {len(records)} {label} (FETCH_ONE mode)")
        return FetchResult(item=records[0], count=len(records))

    if fetch_type == FetchType.STORE:
        uri = store_records(context, records)
        context.logger.info(f"Stored {len(records)} {label} in internal storage at {uri}")
        return FetchResult(uri=uri, count=len(records))

    context.logger.debug(f"Returning all {len(records)} {label} (FETCH mode)")
    return FetchResult(items=records, count=len(records))


def store_records(context: RunContext, records: List[Dict[str, Any]]) -> str:
    """
    Write records to a temporary JSON Lines file and publish it to storage.

    The file is closed before it is handed to storage. If writing fails the
    file is removed and no URI is produced.
    """
    temp_file = context.create_temp_file(suffix=RECORD_FILE_SUFFIX)
    try:
        with open(temp_file, "w", encoding="utf-8") as output:
            written = write_records(output, records)
        logger.debug(f"Wrote {written} records to {temp_file}")
        return context.storage.put_file(temp_file, prefix=context.task_id)
    finally:
        temp_file.unlink(missing_ok=True)
