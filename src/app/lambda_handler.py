"""
AWS Lambda entry point.
Wraps the ASGI app with Mangum; logging switches to JSON under Lambda.
"""

from mangum import Mangum

from src.core.config import settings
from src.core.logging import configure_logging
from src.app.api import app

configure_logging(level=settings.log_level, json_output=True)

handler = Mangum(app, lifespan="off")
