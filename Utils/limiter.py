import os

from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

limiter = Limiter(
    get_remote_address,
    default_limits=[
        os.getenv("LIMIT_DEFAULT_HOURLY", "1000 per hour"),
        os.getenv("LIMIT_DEFAULT_SECONDLY", "20 per second")
    ],
)

LOGIN_LIMIT = os.getenv("LIMIT_LOGIN", "10 per minute")
