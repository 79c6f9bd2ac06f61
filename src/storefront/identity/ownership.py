"""Cart ownership: who a cart belongs to for the current request.

A shopper is identified either by a registered user id or, for guests, by an
opaque session token generated by the client. Exactly one of the two scopes a
request. ``resolve_owner`` is the only place that decides which one, so
registered and guest carts can never bleed into each other.
"""

from dataclasses import dataclass
from uuid import NAMESPACE_URL, uuid5

_CART_NAMESPACE = uuid5(NAMESPACE_URL, "storefront:cart")


@dataclass(frozen=True)
class ByUser:
    """Scope owned by a registered user account."""

    user_id: str

    @property
    def key(self) -> str:
        return f"user:{self.user_id}"

    def criteria(self) -> dict:
        return {"user_id": self.user_id}

    def fields(self) -> dict:
        """Ownership columns to stamp on a new cart item."""
        return {"user_id": self.user_id, "session_id": None}


@dataclass(frozen=True)
class BySession:
    """Scope owned by an anonymous browser session."""

    session_id: str

    @property
    def key(self) -> str:
        return f"session:{self.session_id}"

    def criteria(self) -> dict:
        return {"session_id": self.session_id}

    def fields(self) -> dict:
        return {"user_id": None, "session_id": self.session_id}


Owner = ByUser | BySession


def resolve_owner(user_id=None, session_id=None) -> Owner | None:
    """Pick the scoping key for a request.

    The user id wins when both are supplied. Empty values count as absent, so
    ``resolve_owner("", "")`` is ``None``.
    """
    if user_id:
        return ByUser(user_id=str(user_id))
    if session_id:
        return BySession(session_id=str(session_id))
    return None


def cart_item_id(owner: Owner, product_id) -> str:
    """Stable identity of the cart item holding ``product_id`` for ``owner``.

    Every add of the same product by the same owner addresses this one id,
    which is what keeps (owner, product) unique in storage.
    """
    return str(uuid5(_CART_NAMESPACE, f"{owner.key}:product:{product_id}"))

