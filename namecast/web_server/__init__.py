"""Web server package."""

from namecast.web_server.web_server import NamecastWebServer

__all__ = ["NamecastWebServer"]
