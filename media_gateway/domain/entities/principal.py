"""Principal: the verified identity of the caller for one request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    """Verified caller identity.

    Only constructed by identity verifiers after a token has been checked;
    lives for the duration of a single request.
    """

    user_id: str

    def __post_init__(self) -> None:
        if not self.user_id:
            raise ValueError("Principal user_id must be a non-empty string")
