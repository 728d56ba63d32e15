"""
Record serde - line-delimited JSON used for stored collections

One JSON object per line, UTF-8. Values json cannot encode natively
(datetimes, UUIDs) are written with str().
"""

import json
from typing import Any, Dict, IO, Iterable, Iterator


def write_record(output: IO[str], record: Dict[str, Any]) -> None:
    """Append one record as a single line"""
    output.write(json.dumps(record, ensure_ascii=False, default=str))
    output.write("\n")


def write_records(output: IO[str], records: Iterable[Dict[str, Any]]) -> int:
    """Write records in order and return how many were written"""
    count = 0
    for record in records:
        write_record(output, record)
        count += 1
    return count


def read_records(source: IO[str]) -> Iterator[Dict[str, Any]]:
    """Yield records back in file order, skipping blank lines"""
    for line in source:
        line = line.strip()
        if line:
            yield json.loads(line)
