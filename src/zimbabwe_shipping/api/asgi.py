"""ASGI entrypoint for the Zimbabwe Shipping handlers."""

from zimbabwe_shipping.api.app import create_app
from zimbabwe_shipping.config import Settings
from zimbabwe_shipping.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
