"""Signed URL construction for the StatCounter API.

Each request is authenticated by a SHA-1 digest over the unsigned query
string followed by the account password. The password itself never
appears in the URL.

Query layout: ?vn=<version>&t=<unix time>&u=<username><params>&f=xml&sha1=<digest>
"""

import hashlib
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from statcounter.config import DEFAULT_BASE_URL, DEFAULT_VERSION, Credentials

Params = Iterable[tuple[str, str]]


def sign(query_string: str, password: str) -> str:
    """Return the hex SHA-1 digest of `query_string` + `password`."""
    return hashlib.sha1((query_string + password).encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class SignedURL:
    base_url: str
    endpoint_path: str
    query_string: str
    signature: str

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.endpoint_path}/{self.query_string}&sha1={self.signature}"

    def __str__(self) -> str:
        return self.url


class RequestBuilder:
    """Builds signed URLs for one set of credentials.

    Holds no per-request state: every call assembles its query string
    locally, so one builder can be shared across threads.
    """

    def __init__(
        self,
        credentials: Credentials,
        base_url: str = DEFAULT_BASE_URL,
        version: str = DEFAULT_VERSION,
        clock: Callable[[], float] = time.time,
    ):
        self._credentials = credentials
        self._base_url = base_url.rstrip("/")
        self._version = version
        self._clock = clock

    def query_string(self, params: Params = ()) -> str:
        """Compose the unsigned query string in the fixed slot order."""
        query = f"?vn={self._version}&t={int(self._clock())}&u={self._credentials.username}"
        query += "".join(f"&{key}={value}" for key, value in params)
        return query + "&f=xml"

    def build(self, endpoint_path: str, params: Params = ()) -> SignedURL:
        query = self.query_string(params)
        return SignedURL(
            base_url=self._base_url,
            endpoint_path=endpoint_path,
            query_string=query,
            signature=sign(query, self._credentials.password),
        )

    def build_url(self, endpoint_path: str, params: Params = ()) -> str:
        return self.build(endpoint_path, params).url
