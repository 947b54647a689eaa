"""Response mapping for the StatCounter API.

Turns a parsed XML document into an ApiResponse: either Ok with one flat
record per <sc_data> node, or Error carrying the endpoint's failure
message. Record values are the raw node text, never coerced.
"""

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from statcounter.endpoints import KEYWORD_ACTIVITY, Endpoint
from statcounter.errors import StatCounterError

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
DATA_NODE = "sc_data"
ENCRYPTED_SEARCH = "Encrypted Search"

Record = dict[str, str | None]


@dataclass(frozen=True)
class Ok:
    records: list[Record] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> list[Record]:
        return self.records


@dataclass(frozen=True)
class Error:
    kind: type[StatCounterError]
    message: str
    status: str | None = None

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> list[Record]:
        raise self.kind(self.message)


ApiResponse = Ok | Error


def extract_record(endpoint: Endpoint, node: ET.Element) -> Record:
    """Extract the endpoint's documented fields from one data node."""
    record: Record = {}
    for key, tag in endpoint.fields:
        child = node.find(tag)
        if child is None:
            logger.warning(
                "Field <%s> missing from %s response; %s set to None",
                tag, endpoint.name, key,
            )
            record[key] = None
        else:
            record[key] = child.text or ""
    return record


def is_encrypted_search(keyword: str | None) -> bool:
    return keyword is not None and ENCRYPTED_SEARCH in keyword


def map_response(
    endpoint: Endpoint,
    document: ET.Element,
    exclude_encrypted_kws: bool = False,
) -> ApiResponse:
    """Check the root status marker and extract the endpoint's records.

    With `exclude_encrypted_kws`, keyword-activity records whose keyword
    contains "Encrypted Search" anywhere are dropped; order is kept.
    """
    status = document.get("status")
    if status != STATUS_OK:
        logger.warning("StatCounter %s returned status %r", endpoint.name, status)
        return Error(kind=endpoint.error, message=endpoint.message, status=status)

    records = [extract_record(endpoint, node) for node in document.findall(DATA_NODE)]

    if exclude_encrypted_kws and endpoint.name == KEYWORD_ACTIVITY.name:
        records = [r for r in records if not is_encrypted_search(r["keyword"])]

    return Ok(records=records)


def parse_document(body: bytes | str) -> ET.Element:
    """Parse a response body into its root element."""
    return ET.fromstring(body)
