from enum import Enum


class SessionKind(str, Enum):
    """Who holds the refresh token (an interactive user or a machine client)."""

    USER = "user"
    API = "api"
