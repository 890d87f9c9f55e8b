"""
Feed emitters — RSS (Google Merchant namespace) and CSV serialization.

Both emitters return None when the pipeline produced no records so callers
never write an empty document.
Version: 1.0.0
"""
import csv
import io
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Iterable, Optional

from product_feed.core.constants.feed import (
    CSV_COLUMN_SOURCES,
    CSV_FIELDS,
    GOOGLE_NAMESPACE,
    RSS_GENERATOR,
    RSS_ITEM_FIELDS,
)
from product_feed.schemas.feed import PipelineResult, ShopIdentity
from product_feed.utils.shopify_utils import conform_to_schema

logger = logging.getLogger("feed_emitters")

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

ET.register_namespace("g", GOOGLE_NAMESPACE)


def _g(tag: str) -> str:
    return f"{{{GOOGLE_NAMESPACE}}}{tag}"


def _text(value) -> str:
    return "" if value is None else str(value)


def _csv_source(record: dict) -> dict:
    source = dict(record)
    for column, field in CSV_COLUMN_SOURCES.items():
        source.setdefault(column, record.get(field))
    return source

def emit_rss(
    shop: ShopIdentity,
    result: PipelineResult,
    link_path: str = "/a/product_catalog",
    build_date: Optional[datetime] = None,
) -> Optional[str]:
    """
    Build the product RSS document.

    Every item carries all g: fields; values missing from a sparse record
    are written as empty elements.
    """
    if result.is_empty:
        return None

    rss = ET.Element("rss", {"version": "2.0"})
    channel = ET.SubElement(rss, "channel")
    ET.SubElement(channel, "title").text = shop.name
    ET.SubElement(channel, "description").text = f"Product Feed for {shop.name}"
    ET.SubElement(channel, "link").text = f"https://{shop.domain}{link_path}"
    ET.SubElement(channel, "generator").text = RSS_GENERATOR
    ET.SubElement(channel, "lastBuildDate").text = format_datetime(
        build_date or datetime.now(timezone.utc), usegmt=True
    )

    for record in result.records:
        item = ET.SubElement(channel, "item")
        ET.SubElement(item, "title").text = _text(record.get("title"))
        for field in RSS_ITEM_FIELDS:
            ET.SubElement(item, _g(field)).text = _text(record.get(field))

    ET.indent(rss)
    logger.info("rss feed built shop=%s items=%s", shop.name, len(result.records))
    return XML_DECLARATION + ET.tostring(rss, encoding="unicode")


def emit_csv(result: PipelineResult, fields: Iterable[str] = CSV_FIELDS) -> Optional[str]:
    """
    Build the CSV export.

    Records are conformed to the full column list first so every row has
    the same number of cells regardless of sparseness.
    """
    if result.is_empty:
        return None

    columns = list(fields)
    rows = [conform_to_schema(_csv_source(record), columns) for record in result.records]

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=columns, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    logger.info("csv feed built rows=%s columns=%s", len(rows), len(columns))
    return buffer.getvalue()
