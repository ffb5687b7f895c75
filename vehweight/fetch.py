# vehweight/fetch.py
"""
Paginated bulk download of registration rows from a Socrata-style JSON API.

Pages are requested with $limit/$offset until the source is exhausted or the
caller's cap is reached. A failed page ends the loop; whatever was fetched
before it is kept and the result is flagged incomplete.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
import requests

from . import settings

log = logging.getLogger(__name__)

EXHAUSTED = "exhausted"
MAX_RECORDS = "max_records"
ERROR = "error"


class FetchError(Exception):
    """A page could not be fetched; carries the offset it failed at."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


class TransportError(FetchError):
    pass


class ParseError(FetchError):
    pass


@dataclass
class FetchResult:
    records: List[Dict[str, Any]] = field(default_factory=list)
    complete: bool = True
    stop_reason: str = EXHAUSTED
    last_error: Optional[FetchError] = None
    requests_made: int = 0
    batches: int = 0

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame.from_records(self.records, columns=list(settings.COLUMNS))


def build_params(batch_size: int, offset: int, record_type: Optional[str] = None, order_by: Optional[str] = None) -> Dict[str, Any]:
    record_type = record_type or settings.RECORD_TYPE
    return {
        "$where": f"record_type='{record_type}'",
        "$select": ",".join(settings.COLUMNS),
        "$limit": batch_size,
        "$offset": offset,
        "$order": order_by or settings.ORDER_BY,
    }


def _get_page(session, url: str, params: Dict[str, Any], timeout: float, headers: Dict[str, str]) -> List[Dict[str, Any]]:
    offset = params["$offset"]
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise TransportError(f"request at offset {offset} failed: {e}", offset) from e
    try:
        payload = resp.json()
    except ValueError as e:
        raise ParseError(f"response at offset {offset} is not JSON: {e}", offset) from e
    if not isinstance(payload, list) or not all(isinstance(r, dict) for r in payload):
        raise ParseError(f"response at offset {offset} is not a JSON array of objects", offset)
    return payload


def fetch(
    max_records: Optional[int] = None,
    batch_size: Optional[int] = None,
    *,
    url: Optional[str] = None,
    record_type: Optional[str] = None,
    order_by: Optional[str] = None,
    delay: Optional[float] = None,
    timeout: Optional[float] = None,
    session=None,
    sleep: Callable[[float], None] = time.sleep,
) -> FetchResult:
    batch_size = settings.BATCH_SIZE if batch_size is None else batch_size
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    url = url or settings.SOURCE_URL
    delay = settings.REQUEST_DELAY if delay is None else delay
    timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout
    headers = {"X-App-Token": settings.APP_TOKEN} if settings.APP_TOKEN else {}

    own_session = session is None
    if own_session:
        session = requests.Session()

    result = FetchResult()
    offset = 0
    try:
        while True:
            params = build_params(batch_size, offset, record_type, order_by)
            result.requests_made += 1
            try:
                batch = _get_page(session, url, params, timeout, headers)
            except FetchError as e:
                log.warning("aborting after %d batches (%d rows): %s", result.batches, len(result.records), e)
                result.complete = False
                result.stop_reason = ERROR
                result.last_error = e
                break

            n = len(batch)
            if n == 0:
                result.stop_reason = EXHAUSTED
                break
            result.records.extend(batch)
            result.batches += 1
            log.debug("batch %d: %d rows at offset %d (total %d)", result.batches, n, offset, len(result.records))

            if max_records is not None and len(result.records) >= max_records:
                result.stop_reason = MAX_RECORDS
                break
            if n < batch_size:
                result.stop_reason = EXHAUSTED
                break

            offset += batch_size
            sleep(delay)
    finally:
        if own_session:
            session.close()

    log.info(
        "fetched %d rows in %d requests (stop=%s, complete=%s)",
        len(result.records), result.requests_made, result.stop_reason, result.complete,
    )
    return result
