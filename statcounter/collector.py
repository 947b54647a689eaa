"""Daily summary collector for StatCounter projects.

Collects page views and visit counts for the last N days of one project
and writes them as raw JSON. Falls back to a placeholder result when the
credentials are missing or the API call fails.

CLI: python -m statcounter.collector --project 1234567 --days 7 --output data/raw/
"""

import argparse
import json
import sys
import urllib.error
import xml.etree.ElementTree as ET
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

from statcounter.client import StatCounterClient
from statcounter.config import StatCounterConfig
from statcounter.errors import StatCounterError


def _int(value: str | None) -> int:
    try:
        return int(value or 0)
    except ValueError:
        return 0


def _period(days: int) -> tuple[date, date]:
    end = date.today()
    return end - timedelta(days=days), end


def collect_summary(client: StatCounterClient, project_id: str, days: int = 7) -> dict:
    """Collect daily summary stats for the given number of days.

    Returns a structured dict ready for JSON serialization.
    """
    start, end = _period(days)
    rows = client.get_summary_stats_date_range(project_id, start, end)

    daily = [
        {
            "date": row.get("date"),
            "page_views": _int(row.get("page_views")),
            "unique_visits": _int(row.get("unique_visits")),
            "returning_visits": _int(row.get("returning_visits")),
            "first_time_visits": _int(row.get("first_time_visits")),
        }
        for row in rows
    ]

    return {
        "source": "statcounter",
        "project_id": project_id,
        "collected_at": datetime.now(timezone.utc).isoformat(),
        "available": True,
        "period": {
            "start": start.isoformat(),
            "end": end.isoformat(),
            "days": days,
        },
        "totals": {
            "page_views": sum(d["page_views"] for d in daily),
            "unique_visits": sum(d["unique_visits"] for d in daily),
        },
        "daily": daily,
    }


def unconfigured_result(project_id: str, days: int = 7) -> dict:
    """Return a placeholder result when StatCounter is not configured."""
    start, end = _period(days)
    return {
        "source": "statcounter",
        "project_id": project_id,
        "collected_at": datetime.now(timezone.utc).isoformat(),
        "available": False,
        "reason": "STATCOUNTER_USERNAME and/or STATCOUNTER_PASSWORD not set",
        "period": {
            "start": start.isoformat(),
            "end": end.isoformat(),
            "days": days,
        },
        "totals": {
            "page_views": 0,
            "unique_visits": 0,
        },
        "daily": [],
    }


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        description="Collect daily StatCounter summary stats for one project"
    )
    parser.add_argument("--project", required=True, help="StatCounter project ID")
    parser.add_argument(
        "--days", type=int, default=7, help="Number of days to collect (default: 7)"
    )
    parser.add_argument("--output", required=True, help="Output directory for raw JSON")
    parser.add_argument("--config", help="YAML file with username/password (default: env)")
    args = parser.parse_args(argv)

    if args.config:
        config = StatCounterConfig.from_yaml(args.config)
    else:
        config = StatCounterConfig.from_env()
    output_dir = Path(args.output)
    output_dir.mkdir(parents=True, exist_ok=True)

    if not config.configured:
        print("StatCounter not configured, writing placeholder", file=sys.stderr)
        result = unconfigured_result(args.project, args.days)
    else:
        client = StatCounterClient.from_config(config)
        try:
            result = collect_summary(client, args.project, args.days)
            print(f"Collected summary: {result['totals']['page_views']} page views")
        except (urllib.error.URLError, ET.ParseError, StatCounterError) as e:
            print(f"StatCounter API error: {e}, writing placeholder", file=sys.stderr)
            result = unconfigured_result(args.project, args.days)
            result["reason"] = f"API error: {e}"

    today = date.today().isoformat()
    output_file = output_dir / f"statcounter-{today}.json"
    output_file.write_text(json.dumps(result, indent=2, ensure_ascii=False) + "\n")
    print(f"Wrote {output_file}")
    sys.exit(0)


if __name__ == "__main__":
    main()
