from client.api import ApiClient
from client.exceptions import ApiClientError
from client.models import ApiResult

__all__ = ["ApiClient", "ApiClientError", "ApiResult"]
