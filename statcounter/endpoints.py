"""Endpoint catalog for the StatCounter API.

Each Endpoint describes one remote capability: the URL path, the `s=`
statistic selector for the `stats` path, the order in which parameter
slots are serialized, and the record shape extracted from each
<sc_data> node. Field tables map output record keys to XML child tags.
"""

from dataclasses import dataclass

from statcounter.errors import (
    CREATE_PROJECT_MESSAGE,
    CREDENTIALS_MESSAGE,
    PROJECT_MESSAGE,
    SUMMARY_MESSAGE,
    VISITOR_MESSAGE,
    AuthenticationError,
    RemoteServiceError,
    StatCounterError,
)

# Slot holding the six sm/sd/sy/em/ed/ey date-range parameters
RANGE = "range"


@dataclass(frozen=True)
class Endpoint:
    """A remote capability and the shape of its response records."""

    name: str
    path: str
    fields: tuple[tuple[str, str], ...]
    message: str
    error: type[StatCounterError] = RemoteServiceError
    stat: str | None = None
    granularity: str | None = None
    slots: tuple[str, ...] = ()

    @property
    def field_names(self) -> list[str]:
        return [key for key, _ in self.fields]

    @property
    def paged(self) -> bool:
        return "n" in self.slots


PAGE_FIELDS = (
    ("page_views", "page_views"),
    ("page_title", "page_title"),
    ("page_url", "page_url"),
)

USER_PROJECTS = Endpoint(
    name="user_projects",
    path="user_projects",
    fields=(
        ("project_id", "project_id"),
        ("project_name", "project_name"),
        ("project_url", "url"),
    ),
    message=CREDENTIALS_MESSAGE,
    error=AuthenticationError,
)

USER_DETAILS = Endpoint(
    name="user_details",
    path="user_details",
    fields=(
        ("name", "name"),
        ("email", "email"),
        ("log_quota", "log_quota"),
    ),
    message=CREDENTIALS_MESSAGE,
    error=AuthenticationError,
)

ADD_PROJECT = Endpoint(
    name="add_project",
    path="add_project",
    fields=(
        ("project_id", "project_id"),
        ("security_code", "security_code"),
    ),
    message=CREATE_PROJECT_MESSAGE,
    error=AuthenticationError,
    slots=("wt", "wu", "tz", "ps"),
)

KEYWORD_ACTIVITY = Endpoint(
    name="keyword-activity",
    path="stats",
    fields=(("keyword", "keyword"),),
    message=PROJECT_MESSAGE,
    stat="keyword-activity",
    slots=("s", "pi", RANGE, "n", "o"),
)

POPULAR = Endpoint(
    name="popular",
    path="stats",
    fields=(
        ("page_views", "page_views"),
        ("page_title", "page_title"),
        ("page_url", "url"),
    ),
    message=PROJECT_MESSAGE,
    stat="popular",
    slots=("s", "pi", "ct", RANGE, "n", "o"),
)

ENTRY = Endpoint(
    name="entry",
    path="stats",
    fields=PAGE_FIELDS,
    message=PROJECT_MESSAGE,
    stat="entry",
    slots=("s", "pi", RANGE, "n", "o"),
)

EXIT = Endpoint(
    name="exit",
    path="stats",
    fields=(
        ("page_views", "page_views"),
        ("page_title", "title"),
        ("page_url", "page_url"),
    ),
    message=PROJECT_MESSAGE,
    stat="exit",
    slots=("s", "pi", RANGE, "n", "o"),
)

CAME_FROM = Endpoint(
    name="camefrom",
    path="stats",
    fields=(
        ("page_views", "page_views"),
        ("referring_url", "referring_url"),
    ),
    message=PROJECT_MESSAGE,
    stat="camefrom",
    slots=("s", "pi", "e", RANGE, "n", "o"),
)

BROWSERS = Endpoint(
    name="browsers",
    path="stats",
    fields=(
        ("browser_page_views", "page_views"),
        ("browser_name", "browser_name"),
        ("browser_version", "browser_version"),
        ("browser_percentage", "percentage"),
    ),
    message=PROJECT_MESSAGE,
    stat="browsers",
    slots=("s", "de", "pi", RANGE, "n", "o"),
)

OPERATING_SYSTEMS = Endpoint(
    name="os",
    path="stats",
    fields=(
        ("os_page_views", "page_views"),
        ("os_name", "os_name"),
        ("os_percentage", "percentage"),
    ),
    message=PROJECT_MESSAGE,
    stat="os",
    slots=("s", "de", "pi", RANGE, "n", "o"),
)

PAGELOAD = Endpoint(
    name="pageload",
    path="stats",
    fields=tuple((name, name) for name in (
        "page_url",
        "time",
        "referring_url",
        "page_title",
        "browser_name",
        "browser_version",
        "os_name",
        "device_vendor",
        "device_model",
        "se_keywords",
        "resolution_width",
        "resolution_height",
        "isp",
        "city",
        "state",
        "country",
        "ip_address",
    )),
    message=PROJECT_MESSAGE,
    stat="pageload",
    slots=("s", "de", "pi", RANGE, "n", "o"),
)

EXIT_LINK_ACTIVITY = Endpoint(
    name="exit-link-activity",
    path="stats",
    fields=(
        ("link", "link"),
        ("time", "time"),
        ("page_url", "page_url"),
        ("page_title", "page_title"),
        ("ip_address", "ip_number"),
    ),
    message=PROJECT_MESSAGE,
    stat="exit-link-activity",
    slots=("s", "de", "pi", RANGE, "n", "o"),
)

DOWNLOAD_LINK_ACTIVITY = Endpoint(
    name="download-link-activity",
    path="stats",
    fields=(
        ("link", "link"),
        ("time", "time"),
        ("page_url", "page_url"),
        ("page_title", "page_title"),
        ("ip_address", "ip_number"),
        ("extension", "extension"),
    ),
    message=PROJECT_MESSAGE,
    stat="download-link-activity",
    slots=("s", "de", "pi", "n", RANGE, "o"),
)

SUMMARY = Endpoint(
    name="summary",
    path="stats",
    fields=tuple((name, name) for name in (
        "date",
        "page_views",
        "unique_visits",
        "returning_visits",
        "first_time_visits",
    )),
    message=SUMMARY_MESSAGE,
    stat="summary",
    granularity="daily",
    slots=("s", "g", RANGE, "pi"),
)

VISITOR = Endpoint(
    name="visitor",
    path="stats",
    fields=(
        ("log_visits", "log_visits"),
        ("entries_in_visit", "entries_in_visit"),
        ("entry_time", "entry_t"),
        ("entry_url", "entry_url"),
        ("entry_title", "entry_title"),
        ("se_keywords", "se_keywords"),
        ("link", "link"),
        ("country_name", "country_name"),
        ("state", "state"),
        ("resolution", "res"),
        ("exit_time", "exit_t"),
        ("exit_url", "exit_url"),
        ("exit_page_title", "exit_title"),
        ("returning_count", "returning_count"),
        ("browser_name", "browser_name"),
        ("browser_version", "browser_version"),
        ("os", "os"),
        ("resolution_width", "width"),
        ("resolution_height", "height"),
        ("javascript", "javascript"),
        ("country", "country"),
        ("city", "city"),
        ("isp", "isp"),
        ("ip_address", "ip_address"),
        ("latitude", "latitude"),
        ("longitude", "longitude"),
        ("num_entry", "num_entry"),
        ("visit_length", "visit_length"),
    ),
    message=VISITOR_MESSAGE,
    stat="visitor",
    granularity="daily",
    slots=("s", "g", "pi", "n", RANGE, "o"),
)

ENDPOINTS: dict[str, Endpoint] = {
    endpoint.name: endpoint
    for endpoint in (
        USER_PROJECTS,
        USER_DETAILS,
        ADD_PROJECT,
        KEYWORD_ACTIVITY,
        POPULAR,
        ENTRY,
        EXIT,
        CAME_FROM,
        BROWSERS,
        OPERATING_SYSTEMS,
        PAGELOAD,
        EXIT_LINK_ACTIVITY,
        DOWNLOAD_LINK_ACTIVITY,
        SUMMARY,
        VISITOR,
    )
}


def serialize_params(endpoint: Endpoint, values: dict) -> list[tuple[str, str]]:
    """Order `values` by the endpoint's slot layout, skipping empty slots.

    `values` maps slot names to scalars; the RANGE slot holds a list of
    (key, value) pairs. The `s` and `g` slots are filled from the endpoint.
    """
    values = dict(values)
    if endpoint.stat is not None:
        values.setdefault("s", endpoint.stat)
    if endpoint.granularity is not None:
        values.setdefault("g", endpoint.granularity)

    params: list[tuple[str, str]] = []
    for slot in endpoint.slots:
        value = values.get(slot)
        if value is None:
            continue
        if slot == RANGE:
            params.extend(value)
        else:
            params.append((slot, str(value)))
    return params
