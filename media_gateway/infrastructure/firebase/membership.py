"""Firestore membership oracle.

Two layouts are supported:

- family_document: families/{familyId} holds a 'members' map of
  uid -> {role: ...} (what the web client writes).
- members_subcollection: families/{familyId}/members/{uid} holds {role: ...}.

A member is anyone whose role is admin or viewer. A missing family, a
missing member entry or any other role is simply "not a member".
"""

from __future__ import annotations

import logging
from typing import Any

from media_gateway.domain.enums import MemberRole
from media_gateway.infrastructure.exceptions import MembershipLookupError
from media_gateway.infrastructure.firebase._rest_client import FirestoreRESTClient

logger = logging.getLogger(__name__)

FAMILIES_COLLECTION = "families"
MEMBERS_COLLECTION = "members"
FAMILY_DOCUMENT = "family_document"
MEMBERS_SUBCOLLECTION = "members_subcollection"


def _role_grants_access(entry: Any) -> bool:
    if not isinstance(entry, dict):
        return False
    return entry.get("role") in MemberRole.values()


class FirestoreMembershipOracle:
    """Answer is_member from Firestore; reads are never cached."""

    def __init__(self, client: FirestoreRESTClient, source: str = FAMILY_DOCUMENT) -> None:
        if source not in (FAMILY_DOCUMENT, MEMBERS_SUBCOLLECTION):
            raise ValueError(f"Unknown membership source: {source!r}")
        self.client = client
        self.source = source

    async def is_member(self, tenant_id: str, user_id: str) -> bool:
        """Return True if user_id holds a recognised role in tenant_id.

        Raises:
            MembershipLookupError: Firestore could not be read.
        """
        family = self.client.collection(FAMILIES_COLLECTION).document(tenant_id)
        try:
            if self.source == MEMBERS_SUBCOLLECTION:
                snapshot = await family.collection(MEMBERS_COLLECTION).document(user_id).get()
                entry = snapshot.to_dict() if snapshot else None
            else:
                snapshot = await family.get()
                members = (snapshot.to_dict() if snapshot else {}).get(MEMBERS_COLLECTION)
                entry = members.get(user_id) if isinstance(members, dict) else None
        except MembershipLookupError:
            raise
        except Exception as e:
            raise MembershipLookupError(
                f"Membership lookup failed: {type(e).__name__}"
            ) from e
        return _role_grants_access(entry)

    async def aclose(self) -> None:
        await self.client.aclose()
