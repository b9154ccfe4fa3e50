"""FRED API data fetcher with delta updates and static fallback data."""

import logging
from datetime import date, datetime, timedelta

import httpx
import pandas as pd

from recession_dashboard.config import (
    ALL_FRED_SERIES,
    DEFAULT_START_DATE,
    FRED_SERIES,
    SERIES_START_DATES,
    Settings,
)
from recession_dashboard.data.cache import DataCache
from recession_dashboard.data.fallback import get_fallback


logger = logging.getLogger(__name__)


class FredFetcher:
    """Fetches raw observations from FRED with local caching."""

    BASE_URL = "https://api.stlouisfed.org/fred"

    def __init__(
        self, settings: Settings | None = None, client: httpx.Client | None = None
    ) -> None:
        self.settings = settings or Settings()
        self.cache = DataCache(self.settings.db_path)
        self._client = client

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(timeout=self.settings.request_timeout)
        return self._client

    def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "FredFetcher":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _fetch_series_info(self, series_id: str) -> dict:
        """Fetch metadata for a series from FRED."""
        response = self.client.get(
            f"{self.BASE_URL}/series",
            params={
                "series_id": series_id,
                "api_key": self.settings.fred_api_key,
                "file_type": "json",
            },
        )
        response.raise_for_status()
        data = response.json()

        if "seriess" not in data or not data["seriess"]:
            raise ValueError(f"Series {series_id} not found")

        return data["seriess"][0]

    def _fetch_observations(
        self, series_id: str, start_date: date | None = None
    ) -> list[dict]:
        """
        Fetch raw observations from FRED API.

        Args:
            series_id: FRED series ID
            start_date: Only fetch data after this date (for delta updates)

        Returns:
            Records `{date, value}` with FRED's "." sentinel left in place
        """
        if start_date:
            # Add 1 day to avoid re-fetching the last date we have
            observation_start = (start_date + timedelta(days=1)).isoformat()
        else:
            observation_start = SERIES_START_DATES.get(series_id, DEFAULT_START_DATE)

        response = self.client.get(
            f"{self.BASE_URL}/series/observations",
            params={
                "series_id": series_id,
                "api_key": self.settings.fred_api_key,
                "file_type": "json",
                "observation_start": observation_start,
                "observation_end": date.today().isoformat(),
                "sort_order": "asc",
            },
        )
        response.raise_for_status()
        data = response.json()

        observations = data.get("observations")
        if not isinstance(observations, list):
            raise ValueError(f"Unexpected response for {series_id}: no observations list")

        return [{"date": obs.get("date"), "value": obs.get("value")} for obs in observations]

    def fetch_series(self, series_id: str, force_full: bool = False) -> list[dict]:
        """
        Fetch a single series, using delta updates when possible.

        Args:
            series_id: FRED series ID
            force_full: If True, fetch entire history regardless of cache

        Returns:
            Complete record list including cached + new data
        """
        logger.info(f"Fetching {series_id}...")

        start_date = None
        if not force_full:
            start_date = self.cache.get_latest_date(series_id)
            if start_date and start_date >= date.today():
                logger.info("  Already up to date")
                return self.cache.get_records(series_id)
            if start_date:
                logger.info(f"  Delta update from {start_date}")

        records = self._fetch_observations(series_id, start_date)
        fetched_at = datetime.now()

        if records:
            df = pd.DataFrame(records)
            df["date"] = pd.to_datetime(df["date"])
            df["value"] = pd.to_numeric(df["value"], errors="coerce")
            df.set_index("date", inplace=True)
            rows_stored = self.cache.store_observations(series_id, df, fetched_at)
            logger.info(f"  Stored {rows_stored} new observations")

            try:
                info = self._fetch_series_info(series_id)
                self.cache.store_metadata(
                    series_id=series_id,
                    title=info.get("title", ""),
                    frequency=info.get("frequency", ""),
                    units=info.get("units", ""),
                    last_updated=datetime.fromisoformat(
                        info.get("last_updated", fetched_at.isoformat())[:19].replace(" ", "T")
                    ),
                )
            except (httpx.HTTPError, ValueError) as e:
                logger.warning(f"  Could not fetch metadata: {e}")
        else:
            logger.info("  No new data")

        return self.cache.get_records(series_id)

    def _offline_records(self, series_id: str) -> list[dict]:
        """Cached records, or the static fallback dataset if nothing is cached."""
        records = self.cache.get_records(series_id)
        if records:
            return records
        logger.warning(f"  {series_id}: using static fallback data")
        return get_fallback(series_id)

    def fetch_payload(
        self, series_ids: list[str] | None = None, force_full: bool = False
    ) -> dict[str, list[dict]]:
        """
        Records for each series, never failing as a whole.

        A series that cannot be fetched is served from the cache, then from
        static fallback data.
        """
        series_ids = series_ids or list(ALL_FRED_SERIES)

        if not self.settings.has_fred_key():
            logger.warning("FRED_API_KEY not set, serving cached or fallback data")
            return {sid: self._offline_records(sid) for sid in series_ids}

        payload = {}
        errors = {}
        for series_id in series_ids:
            try:
                payload[series_id] = self.fetch_series(series_id, force_full)
            except httpx.HTTPStatusError as e:
                logger.error(f"HTTP error fetching {series_id}: {e.response.status_code}")
                errors[series_id] = str(e)
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Error fetching {series_id}: {e}")
                errors[series_id] = str(e)

            if series_id in errors:
                payload[series_id] = self._offline_records(series_id)

        if errors:
            logger.warning(f"Failed to fetch {len(errors)} series: {list(errors.keys())}")

        return payload

    def get_status(self) -> dict:
        """Get cache status for all series."""
        status = self.cache.get_cache_status()

        for series_id, title in ALL_FRED_SERIES.items():
            if series_id not in status:
                status[series_id] = {
                    "title": title,
                    "observation_count": 0,
                    "missing_count": 0,
                    "first_date": None,
                    "last_date": None,
                    "last_fetched": None,
                }

        return status


def main() -> None:
    """CLI entry point for fetching data."""
    import argparse
    import sys

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Fetch FRED recession indicator data")
    parser.add_argument(
        "--full",
        action="store_true",
        help="Force full refresh instead of delta update",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Show cache status and exit",
    )
    parser.add_argument(
        "--series",
        type=str,
        help="Fetch specific series only",
    )
    args = parser.parse_args()

    try:
        with FredFetcher() as fetcher:
            if args.status:
                status = fetcher.get_status()
                print("\nCache Status:")
                print("-" * 70)
                for series_id, info in sorted(status.items()):
                    count = info["observation_count"]
                    last = info["last_date"] or "N/A"
                    title = info.get("title") or ALL_FRED_SERIES.get(series_id, "")
                    print(f"{series_id:20} | {count:6} obs | Last: {last:10} | {title}")
                return

            fetcher.settings.validate()

            if args.series:
                if args.series not in ALL_FRED_SERIES:
                    print(f"Unknown series: {args.series}")
                    print(f"Available: {', '.join(ALL_FRED_SERIES.keys())}")
                    sys.exit(1)
                fetcher.fetch_series(args.series, force_full=args.full)
            else:
                fetcher.fetch_payload(force_full=args.full)

            print("\nDone. Cache status:")
            status = fetcher.get_status()
            for series_id in FRED_SERIES:
                info = status.get(series_id, {})
                count = info.get("observation_count", 0)
                last = info.get("last_date", "N/A")
                print(f"  {series_id}: {count} observations, last date: {last}")

    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        print(f"API error: {e.response.status_code} - {e.response.text}")
        sys.exit(1)


if __name__ == "__main__":
    main()
