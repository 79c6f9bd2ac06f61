"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A shopper created an account."""

    __version__ = 1

    user_id: Identifier(required=True)
    username: String(required=True, max_length=50)
    created_at: DateTime(required=True)


@storefront.event(part_of="User")
class WalletConnected:
    """A wallet address was attached to (or replaced on) a user account."""

    __version__ = 1

    user_id: Identifier(required=True)
    wallet_address: String(required=True, max_length=255)
    previous_wallet_address: String(max_length=255)
