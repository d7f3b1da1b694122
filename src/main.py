"""ASGI entry point.

    uvicorn src.main:app --host 0.0.0.0 --port 3000
"""

from src.api import create_app
from src.config import get_config

app = create_app(get_config())
