"""Search YouTube from the command line and optionally export the page to CSV.

Usage:
  python -m scripts.search_videos QUERY [--date 1month] [--duration short] [--order viewCount]
                                        [--page-token TOKEN] [--api-key KEY] [--csv DIR]
                                        [--comments VIDEO_ID] [--json]

Exit code 0 on success, 1 on API errors, 2 on precondition errors (missing key or blank input).
"""
import argparse
from dataclasses import asdict
import json
import sys

from tubesearch.config import configure_logging, load_settings
from tubesearch.errors import APIError, PreconditionError
from tubesearch.export import format_count, format_duration
from tubesearch.models import DATE_FILTERS, DURATION_FILTERS, SORT_ORDERS
from tubesearch.session import DashboardSession


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Search YouTube videos via the Data API")
    p.add_argument("query", nargs="?", default="", help="Search text")
    p.add_argument("--date", choices=DATE_FILTERS, default="all", help="Only videos published within this window")
    p.add_argument("--duration", choices=DURATION_FILTERS, default="any", help="Video length bucket")
    p.add_argument("--order", choices=SORT_ORDERS, default="date", help="Sort order")
    p.add_argument("--page-token", help="Cursor from a previous run's next/prev token")
    p.add_argument("--api-key", help="YouTube API key (defaults to YOUTUBE_API_KEY)")
    p.add_argument("--csv", metavar="DIR", help="Write the result page as CSV into DIR")
    p.add_argument("--comments", metavar="VIDEO_ID", help="Show top comments for a video instead of searching")
    p.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    p.add_argument("--log-level", help="Override TUBESEARCH_LOG_LEVEL")
    return p.parse_args(argv)


def _print_page(session: DashboardSession) -> None:
    page = session.page
    if not page.records:
        print("No results.")
        return
    for i, v in enumerate(page.records, 1):
        print(
            f"{i:>2}. {v.title} | {v.channel_title} | {format_duration(v.duration_iso8601)} | "
            f"{format_count(v.view_count)} views | {v.published_at.split('T')[0]} | {v.url}"
        )
    print(f"Showing {len(page.records)} of {page.total_results} results")
    if page.next_cursor:
        print(f"next page: --page-token {page.next_cursor}")
    if page.prev_cursor:
        print(f"prev page: --page-token {page.prev_cursor}")


def _run_comments(session: DashboardSession, video_id: str, as_json: bool) -> int:
    try:
        comments = session.open_comments(video_id)
    except PreconditionError as e:
        print(str(e), file=sys.stderr)
        return 2
    if session.comments_error:
        print(f"Could not load comments: {session.comments_error}", file=sys.stderr)
        return 1
    if as_json:
        print(json.dumps([asdict(c) for c in comments], indent=2, ensure_ascii=False))
        return 0
    if not comments:
        print("No comments to show.")
    for c in comments:
        print(f"- {c.author_display_name} ({c.published_at.split('T')[0]}, {c.like_count} likes): {c.text_display}")
    return 0


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    session = DashboardSession()
    session.set_api_key(args.api_key or None)
    if not session.api_key:
        session.set_api_key(load_settings().api_key)

    if args.comments:
        return _run_comments(session, args.comments, args.json)

    try:
        session.search(
            query=args.query,
            date_filter=args.date,
            duration_filter=args.duration,
            sort_order=args.order,
            page_cursor=args.page_token,
        )
    except PreconditionError as e:
        print(str(e), file=sys.stderr)
        return 2
    except APIError as e:
        print(f"YouTube API error: {e.message}", file=sys.stderr)
        return 1

    if args.json:
        page = session.page
        print(
            json.dumps(
                {
                    "totalResults": page.total_results,
                    "nextPageToken": page.next_cursor,
                    "prevPageToken": page.prev_cursor,
                    "videos": [
                        {
                            "id": v.id,
                            "title": v.title,
                            "channelTitle": v.channel_title,
                            "publishedAt": v.published_at,
                            "duration": format_duration(v.duration_iso8601),
                            "viewCount": v.view_count,
                            "commentCount": v.comment_count,
                            "tags": list(v.tags) if v.tags is not None else None,
                            "url": v.url,
                        }
                        for v in page.records
                    ],
                },
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        _print_page(session)

    if args.csv:
        path = session.export_csv(args.csv)
        if path is None:
            print("Nothing to export.")
        else:
            print(f"Exported {len(session.page.records)} row(s) -> {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
