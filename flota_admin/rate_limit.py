"""Rate limiting global / Global rate limiter.

Utiliza slowapi para limitar las peticiones por IP.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from flota_admin.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
