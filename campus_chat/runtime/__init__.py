from .logging import configure_logging
from .settings import load_client_settings, load_server_settings

__all__ = ["configure_logging", "load_client_settings", "load_server_settings"]
