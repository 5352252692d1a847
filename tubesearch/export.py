"""CSV export of the currently displayed result page.

The file starts with a UTF-8 byte-order mark so spreadsheet tools pick the
right encoding for non-ASCII titles. Title, channel and tags are always
quoted; the remaining columns never contain commas.
"""

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .models import VideoRecord

BOM = "\ufeff"
HEADERS = ["Video ID", "Title", "Channel", "Duration", "Published At", "Views", "Comments", "Tags", "URL"]
FILENAME_TEMPLATE = "youtube_search_results_{}.csv"

_DURATION_RE = re.compile(r"PT(\d+H)?(\d+M)?(\d+S)?")


def format_duration(iso_duration: Optional[str]) -> str:
    """``PT1H2M10S`` -> ``1:02:10``, ``PT5M`` -> ``5:00``, ``PT45S`` -> ``0:45``."""
    if not iso_duration:
        return "N/A"
    m = _DURATION_RE.search(iso_duration)
    if not m:
        return "0:00"

    hours = int(m.group(1)[:-1]) if m.group(1) else 0
    minutes = int(m.group(2)[:-1]) if m.group(2) else 0
    seconds = int(m.group(3)[:-1]) if m.group(3) else 0

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_count(value: Optional[str]) -> str:
    if not value:
        return "0"
    try:
        return f"{int(value):,}"
    except ValueError:
        return value


def quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def csv_row(record: VideoRecord) -> List[str]:
    tags = ", ".join(record.tags) if record.tags else ""
    return [
        record.id,
        quote(record.title),
        quote(record.channel_title),
        format_duration(record.duration_iso8601),
        record.published_at.split("T")[0],
        record.view_count or "0",
        record.comment_count or "0",
        quote(tags),
        record.url,
    ]


def build_csv(records: Iterable[VideoRecord]) -> str:
    lines = [",".join(HEADERS)]
    lines.extend(",".join(csv_row(r)) for r in records)
    return BOM + "\n".join(lines)


def export_filename(now: Optional[datetime] = None) -> str:
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return FILENAME_TEMPLATE.format(moment.strftime("%Y-%m-%d"))


def write_csv(
    records: Iterable[VideoRecord],
    directory: Union[str, Path] = ".",
    now: Optional[datetime] = None,
) -> Path:
    """Write ``records`` to ``directory`` and return the file path."""
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(now)
    # newline="" keeps the "\n" row separator as written
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(build_csv(records))
    return path
