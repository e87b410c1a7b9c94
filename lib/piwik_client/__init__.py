import logging

from .client import PiwikClient
from .config_types import ClientConfig
from .errors import PiwikApiError, PiwikClientError
from .transport import Transport

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["PiwikClient", "ClientConfig", "Transport", "PiwikApiError", "PiwikClientError"]
