"""Rate limiter for the credential endpoints."""

from slowapi import Limiter
from slowapi.util import get_remote_address

# Shared across routers; tests switch it off with limiter.enabled = False
limiter = Limiter(key_func=get_remote_address)
