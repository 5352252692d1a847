from datetime import datetime, timedelta, timezone

import pytest

from tubesearch.export import (
    BOM,
    build_csv,
    export_filename,
    format_count,
    format_duration,
    quote,
    write_csv,
)
from tubesearch.models import VideoRecord


def make_record(**overrides):
    fields = dict(
        id="dQw4w9WgXcQ",
        title="Intro",
        channel_title="Chan A",
        published_at="2024-05-01T10:00:00Z",
        duration_iso8601="PT3M33S",
        view_count="1500",
        comment_count="20",
        tags=("music", "80s"),
    )
    fields.update(overrides)
    return VideoRecord(**fields)


@pytest.mark.parametrize(
    "iso, expected",
    [
        ("PT1H2M10S", "1:02:10"),
        ("PT5M", "5:00"),
        ("PT45S", "0:45"),
        ("PT2H", "2:00:00"),
        ("PT10M5S", "10:05"),
        (None, "N/A"),
        ("", "N/A"),
        ("P1D", "0:00"),
    ],
)
def test_format_duration(iso, expected):
    assert format_duration(iso) == expected


def test_quote_doubles_inner_quotes():
    assert quote('He said "hi"') == '"He said ""hi"""'


def test_csv_layout():
    text = build_csv([make_record(title='He said "hi"')])
    assert text.startswith(BOM)
    lines = text[len(BOM):].split("\n")
    assert lines[0] == "Video ID,Title,Channel,Duration,Published At,Views,Comments,Tags,URL"
    assert lines[1] == (
        'dQw4w9WgXcQ,"He said ""hi""","Chan A",3:33,2024-05-01,1500,20,"music, 80s",'
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    )
    assert len(lines) == 2


def test_missing_values():
    rec = make_record(tags=None, view_count=None, comment_count=None, duration_iso8601=None)
    row = build_csv([rec]).split("\n")[1]
    assert row.split(",")[3:8] == ["N/A", "2024-05-01", "0", "0", '""']


def test_non_ascii_titles_kept():
    row = build_csv([make_record(title="리액트 강의", channel_title="코딩채널")]).split("\n")[1]
    assert '"리액트 강의","코딩채널"' in row


def test_header_only_for_no_records():
    assert build_csv([]) == BOM + "Video ID,Title,Channel,Duration,Published At,Views,Comments,Tags,URL"


def test_export_filename_uses_utc_date():
    assert export_filename(datetime(2024, 5, 3, 23, 59)) == "youtube_search_results_2024-05-03.csv"
    kst = timezone(timedelta(hours=9))
    assert export_filename(datetime(2024, 5, 4, 1, 0, tzinfo=kst)) == "youtube_search_results_2024-05-03.csv"


def test_write_csv(tmp_path):
    path = write_csv([make_record()], tmp_path / "out", now=datetime(2024, 5, 3, tzinfo=timezone.utc))
    assert path.name == "youtube_search_results_2024-05-03.csv"
    raw = path.read_bytes()
    assert raw.startswith(b"\xef\xbb\xbf")
    assert b"\r\n" not in raw
    assert raw.decode("utf-8-sig").count("\n") == 1


def test_format_count():
    assert format_count("1234567") == "1,234,567"
    assert format_count(None) == "0"
    assert format_count("n/a") == "n/a"
