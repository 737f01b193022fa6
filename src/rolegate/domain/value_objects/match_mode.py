"""How several required permissions are combined."""

from enum import StrEnum


class MatchMode(StrEnum):
    """ALL requires every permission, ANY requires at least one."""

    ALL = "ALL"
    ANY = "ANY"
