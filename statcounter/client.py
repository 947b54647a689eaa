"""StatCounter API client.

One method per remote capability. Each call validates its fixed-choice
parameters, builds a signed URL, performs a single GET, parses the XML
body and maps it to records. Uses only stdlib urllib and ElementTree.

Usage:
    client = StatCounterClient("username", "password")
    client.get_popular_pages("1234567", 10)
    client.get_popular_pages("1234567", start_date="01/01/2020", end_date="01/31/2020")
"""

import logging
import time
import urllib.parse
import urllib.request
from collections.abc import Callable
from functools import partial

from statcounter import endpoints
from statcounter.config import DEFAULT_BASE_URL, DEFAULT_VERSION, Credentials, StatCounterConfig
from statcounter.endpoints import RANGE, Endpoint, serialize_params
from statcounter.errors import INVALID_DATES_MESSAGE, InvalidParameterError
from statcounter.responses import ApiResponse, Record, map_response, parse_document
from statcounter.signing import RequestBuilder
from statcounter.validation import DateLike, check_device, check_timezone, date_range_params

logger = logging.getLogger(__name__)

DEFAULT_RESULTS = 20


def fetch_xml(url: str, timeout: float = 30) -> bytes:
    """Make a GET request to the StatCounter API and return the raw body."""
    req = urllib.request.Request(url)
    req.add_header("Accept", "application/xml")

    with urllib.request.urlopen(req, timeout=timeout) as resp:
        return resp.read()


class StatCounterClient:
    """Credential-authenticated client for the StatCounter API.

    Credentials are fixed at construction. `clock` and `fetch` may be
    injected; by default the wall clock and `fetch_xml` are used.
    """

    def __init__(
        self,
        username: str,
        password: str,
        base_url: str = DEFAULT_BASE_URL,
        version: str = DEFAULT_VERSION,
        timeout: float = 30,
        clock: Callable[[], float] = time.time,
        fetch: Callable[[str], bytes] | None = None,
    ):
        self.credentials = Credentials(username=username, password=password)  # allow-secret
        self.builder = RequestBuilder(self.credentials, base_url, version, clock)
        self._fetch = fetch or partial(fetch_xml, timeout=timeout)

    @classmethod
    def from_config(cls, config: StatCounterConfig, **kwargs) -> "StatCounterClient":
        return cls(
            config.username,
            config.password,
            base_url=config.base_url,
            version=config.version,
            timeout=config.timeout,
            **kwargs,
        )

    # Plumbing

    def request(
        self,
        endpoint: Endpoint,
        values: dict | None = None,
        exclude_encrypted_kws: bool = False,
    ) -> ApiResponse:
        """Perform one signed request and map the response, without raising on status."""
        params = serialize_params(endpoint, values or {})
        url = self.builder.build_url(endpoint.path, params)
        logger.debug("GET %s (%s)", endpoint.path, endpoint.stat or endpoint.name)

        document = parse_document(self._fetch(url))
        return map_response(endpoint, document, exclude_encrypted_kws)

    def _records(self, endpoint: Endpoint, values: dict | None = None, **kwargs) -> list[Record]:
        return self.request(endpoint, values, **kwargs).unwrap()

    def _stats(
        self,
        endpoint: Endpoint,
        values: dict,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        num_of_results: int | None = None,
        offset: int | None = None,
        **kwargs,
    ) -> list[Record]:
        values = dict(values)
        if start_date is not None or end_date is not None:
            if start_date is None or end_date is None:
                raise InvalidParameterError(INVALID_DATES_MESSAGE)
            values[RANGE] = date_range_params(start_date, end_date)
            if endpoint.paged:
                values["n"] = DEFAULT_RESULTS if num_of_results is None else num_of_results
                values["o"] = 0 if offset is None else offset
        elif endpoint.paged:
            values["n"] = num_of_results
            values["o"] = offset
        return self._records(endpoint, values, **kwargs)

    # Account

    def valid_login(self) -> bool:
        """Return True if the username and password are accepted."""
        return self.request(endpoints.USER_PROJECTS).ok

    def get_user_details(self) -> Record:
        records = self._records(endpoints.USER_DETAILS)
        return records[0] if records else {}

    def get_user_project_details(self) -> list[Record]:
        return self._records(endpoints.USER_PROJECTS)

    def create_statcounter_project(
        self, website_url: str, website_title: str, timezone: str
    ) -> Record:
        """Create a project and return its new project_id and security_code."""
        check_timezone(timezone)
        values = {
            "wt": urllib.parse.quote_plus(website_title),
            "wu": urllib.parse.quote_plus(website_url),
            "tz": urllib.parse.quote_plus(timezone),
            "ps": 0,
        }
        records = self._records(endpoints.ADD_PROJECT, values)
        return records[0] if records else {}

    # Statistics

    def get_recent_keyword_activity(
        self,
        project_id: str,
        num_of_results: int = DEFAULT_RESULTS,
        exclude_encrypted_kws: bool = False,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        offset: int | None = None,
    ) -> list[str | None]:
        """Return the most recent search keywords that led visitors to the site."""
        records = self._stats(
            endpoints.KEYWORD_ACTIVITY,
            {"pi": project_id},
            start_date,
            end_date,
            num_of_results,
            offset,
            exclude_encrypted_kws=exclude_encrypted_kws,
        )
        return [r["keyword"] for r in records]

    def get_popular_pages(
        self,
        project_id: str,
        num_of_results: int = DEFAULT_RESULTS,
        count_type: str = "page_view",
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        return self._stats(
            endpoints.POPULAR,
            {"pi": project_id, "ct": count_type},
            start_date,
            end_date,
            num_of_results,
            offset,
        )

    def get_entry_pages(
        self,
        project_id: str,
        num_of_results: int = DEFAULT_RESULTS,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        return self._stats(
            endpoints.ENTRY, {"pi": project_id}, start_date, end_date, num_of_results, offset
        )

    def get_exit_pages(
        self,
        project_id: str,
        num_of_results: int = DEFAULT_RESULTS,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        return self._stats(
            endpoints.EXIT, {"pi": project_id}, start_date, end_date, num_of_results, offset
        )

    def get_came_from(
        self,
        project_id: str,
        num_of_results: int = DEFAULT_RESULTS,
        external: int = 1,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        """Return referring URLs; `external=1` restricts to external referrers."""
        return self._stats(
            endpoints.CAME_FROM,
            {"pi": project_id, "e": external},
            start_date,
            end_date,
            num_of_results,
            offset,
        )

    def _device_stats(
        self,
        endpoint: Endpoint,
        project_id: str,
        device: str,
        start_date: DateLike | None,
        end_date: DateLike | None,
        num_of_results: int | None,
        offset: int | None,
    ) -> list[Record]:
        values = {"de": check_device(device), "pi": project_id}
        return self._stats(endpoint, values, start_date, end_date, num_of_results, offset)

    def get_browsers(
        self,
        project_id: str,
        device: str = "all",
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        num_of_results: int | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        """Return browser shares for the project.

        `device` is one of "all", "desktop" or "mobile".
        """
        return self._device_stats(
            endpoints.BROWSERS, project_id, device, start_date, end_date, num_of_results, offset
        )

    def get_operating_systems(
        self,
        project_id: str,
        device: str = "all",
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        num_of_results: int | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        return self._device_stats(
            endpoints.OPERATING_SYSTEMS,
            project_id,
            device,
            start_date,
            end_date,
            num_of_results,
            offset,
        )

    def get_recent_pageload_activity(
        self,
        project_id: str,
        device: str = "all",
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        num_of_results: int | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        return self._device_stats(
            endpoints.PAGELOAD, project_id, device, start_date, end_date, num_of_results, offset
        )

    def get_exit_link_activity(
        self,
        project_id: str,
        device: str = "all",
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        num_of_results: int | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        return self._device_stats(
            endpoints.EXIT_LINK_ACTIVITY,
            project_id,
            device,
            start_date,
            end_date,
            num_of_results,
            offset,
        )

    def get_download_link_activity(
        self,
        project_id: str,
        device: str = "all",
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        num_of_results: int | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        return self._device_stats(
            endpoints.DOWNLOAD_LINK_ACTIVITY,
            project_id,
            device,
            start_date,
            end_date,
            num_of_results,
            offset,
        )

    def get_summary_stats_date_range(
        self, project_id: str, start_date: DateLike, end_date: DateLike
    ) -> list[Record]:
        """Return one summary record per day of the range."""
        return self._stats(endpoints.SUMMARY, {"pi": project_id}, start_date, end_date)

    def get_summary_stats_date(self, project_id: str, day: DateLike) -> Record | None:
        records = self.get_summary_stats_date_range(project_id, day, day)
        return records[0] if records else None

    def get_recent_visitors(
        self,
        project_id: str,
        num_of_results: int = DEFAULT_RESULTS,
        start_date: DateLike | None = None,
        end_date: DateLike | None = None,
        offset: int | None = None,
    ) -> list[Record]:
        return self._stats(
            endpoints.VISITOR, {"pi": project_id}, start_date, end_date, num_of_results, offset
        )

    # Date-range forms, argument order as in the versioned API

    def get_recent_keyword_activity_date_range(
        self,
        project_id: str,
        start_date: DateLike,
        end_date: DateLike,
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
        exclude_encrypted_kws: bool = False,
    ) -> list[str | None]:
        return self.get_recent_keyword_activity(
            project_id, num_of_results, exclude_encrypted_kws, start_date, end_date, offset
        )

    def get_popular_pages_date_range(
        self,
        project_id: str,
        start_date: DateLike,
        end_date: DateLike,
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
        count_type: str = "page_view",
    ) -> list[Record]:
        return self.get_popular_pages(
            project_id, num_of_results, count_type, start_date, end_date, offset
        )

    def get_entry_pages_date_range(
        self,
        project_id: str,
        start_date: DateLike,
        end_date: DateLike,
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
    ) -> list[Record]:
        return self.get_entry_pages(project_id, num_of_results, start_date, end_date, offset)

    def get_exit_pages_date_range(
        self,
        project_id: str,
        start_date: DateLike,
        end_date: DateLike,
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
    ) -> list[Record]:
        return self.get_exit_pages(project_id, num_of_results, start_date, end_date, offset)

    def get_came_from_date_range(
        self,
        project_id: str,
        start_date: DateLike,
        end_date: DateLike,
        external: int = 1,
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
    ) -> list[Record]:
        return self.get_came_from(
            project_id, num_of_results, external, start_date, end_date, offset
        )

    def get_browsers_date_range(
        self,
        project_id: str,
        start_date: DateLike,
        end_date: DateLike,
        device: str = "all",
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
    ) -> list[Record]:
        return self.get_browsers(
            project_id, device, start_date, end_date, num_of_results, offset
        )

    def get_operating_systems_date_range(
        self,
        project_id: str,
        start_date: DateLike,
        end_date: DateLike,
        device: str = "all",
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
    ) -> list[Record]:
        return self.get_operating_systems(
            project_id, device, start_date, end_date, num_of_results, offset
        )

    def get_recent_pageload_activity_date_range(
        self,
        project_id: str,
        device: str,
        start_date: DateLike,
        end_date: DateLike,
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
    ) -> list[Record]:
        return self.get_recent_pageload_activity(
            project_id, device, start_date, end_date, num_of_results, offset
        )

    def get_exit_link_activity_date_range(
        self,
        project_id: str,
        device: str,
        start_date: DateLike,
        end_date: DateLike,
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
    ) -> list[Record]:
        return self.get_exit_link_activity(
            project_id, device, start_date, end_date, num_of_results, offset
        )

    def get_download_link_activity_date_range(
        self,
        project_id: str,
        device: str,
        start_date: DateLike,
        end_date: DateLike,
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
    ) -> list[Record]:
        return self.get_download_link_activity(
            project_id, device, start_date, end_date, num_of_results, offset
        )

    def get_recent_visitors_date_range(
        self,
        project_id: str,
        start_date: DateLike,
        end_date: DateLike,
        num_of_results: int = DEFAULT_RESULTS,
        offset: int = 0,
    ) -> list[Record]:
        return self.get_recent_visitors(project_id, num_of_results, start_date, end_date, offset)
