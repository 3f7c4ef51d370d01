"""Resource wrappers and the client factory."""

from cealloga.api.client import ApiClient, api
from cealloga.api.endpoints import ENDPOINTS
from cealloga.api.query import query_string
from cealloga.api.resources import Cealloga, Code

__all__ = ["ApiClient", "Cealloga", "Code", "ENDPOINTS", "api", "query_string"]
