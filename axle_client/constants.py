# axle_client/constants.py
from enum import Enum

VERSION_ENDPOINT = "v1/"

DEFAULT_AXLE_URL = "http://localhost:28902/"
DEFAULT_TIMEOUT = 5.0
DEFAULT_TRANSPORT = "http"
DEFAULT_LOG_LEVEL = "INFO"

# paging bounds used by the list endpoints when the caller gives none
DEFAULT_FROM = 0
DEFAULT_TO = 10

API_DEFAULT_ENDPOINT_TIMEOUT = 2
API_DEFAULT_MAX_REDIRECTS = 2

KEY_DEFAULT_QPD = 172800
KEY_DEFAULT_QPS = 2


class Protocol(str, Enum):
    HTTP = "http"
    HTTPS = "https"


class ApiFormat(str, Enum):
    JSON = "json"
    XML = "xml"


class Granularity(str, Enum):
    """Bucket size for stats and charts queries."""
    SECONDS = "second"
    MINUTES = "minute"
    HOURS = "hour"
    DAYS = "day"


class HitType(str, Enum):
    """Response classification used as the outer key of stats results."""
    CACHED = "cached"
    UNCACHED = "uncached"
    ERROR = "error"
