# vehweight/pipeline.py
from __future__ import annotations
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from . import settings
from .aggregate import aggregate_cleaned, clean
from .fetch import FetchResult, fetch
from .log import configure_logging
from .summary import summarize
from .weight_classes import color_map

log = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    fetch: FetchResult
    aggregate: pd.DataFrame
    summary: pd.DataFrame
    records_cleaned: int
    out_dir: Path


def _status(res: PipelineResult) -> Dict[str, Any]:
    f = res.fetch
    return {
        "complete": f.complete,
        "stop_reason": f.stop_reason,
        "last_error": str(f.last_error) if f.last_error else None,
        "requests_made": f.requests_made,
        "batches": f.batches,
        "records_fetched": len(f.records),
        "records_cleaned": res.records_cleaned,
        "colors": color_map(),
    }


def publish(res: PipelineResult) -> None:
    out_dir = res.out_dir
    out_dir.mkdir(parents=True, exist_ok=True)

    agg_path = out_dir / settings.AGG_PARQUET.name
    pq.write_table(pa.Table.from_pandas(res.aggregate, preserve_index=False), agg_path)
    log.info("wrote %d rows -> %s", len(res.aggregate), agg_path)

    summary_path = out_dir / settings.SUMMARY_CSV.name
    res.summary.to_csv(summary_path, index=False)
    log.info("wrote summary -> %s", summary_path)

    status_path = out_dir / settings.STATUS_JSON.name
    with open(status_path, "w", encoding="utf-8") as f:
        json.dump(_status(res), f, ensure_ascii=False, indent=2)
    log.info("wrote status -> %s", status_path)


def run(
    max_records: Optional[int] = None,
    batch_size: Optional[int] = None,
    out_dir: Optional[Path] = None,
    session=None,
    **fetch_kwargs,
) -> PipelineResult:
    if max_records is None:
        max_records = settings.MAX_RECORDS
    fetched = fetch(max_records, batch_size, session=session, **fetch_kwargs)
    cleaned = clean(fetched.to_frame())
    agg = aggregate_cleaned(cleaned)
    res = PipelineResult(
        fetch=fetched,
        aggregate=agg,
        summary=summarize(agg),
        records_cleaned=len(cleaned),
        out_dir=Path(out_dir) if out_dir is not None else settings.OUT,
    )
    publish(res)
    if not fetched.complete:
        log.warning("outputs are partial: %s", fetched.last_error)
    return res


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) > 1:
        raise SystemExit("Usage: python -m vehweight.pipeline [max_records]")
    configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
    max_records = int(argv[0]) if argv else None
    res = run(max_records=max_records)
    return 0 if res.fetch.complete else 1


if __name__ == "__main__":
    raise SystemExit(main())
