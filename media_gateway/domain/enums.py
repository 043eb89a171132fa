"""Domain enumerations for the media gateway."""

from enum import Enum


class MediaKind(str, Enum):
    """Kind of media an upload intent describes.

    Drives the size ceiling and the content-type allow-list.
    """

    PHOTO = "photo"
    VIDEO = "video"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid kind values as strings."""
        return [kind.value for kind in cls]


class MemberRole(str, Enum):
    """Roles recognised on a family membership record."""

    ADMIN = "admin"
    VIEWER = "viewer"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]


class StorageVerb(str, Enum):
    """HTTP verb a presigned capability grants."""

    PUT = "PUT"
    GET = "GET"
