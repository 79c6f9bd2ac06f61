"""User aggregate — registered shopper accounts."""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, String

from storefront.domain import storefront
from storefront.identity.events import UserRegistered, WalletConnected


@storefront.aggregate
class User:
    """A registered shopper.

    The password is an opaque credential handed over by the client; it is
    stored as given and never echoed back by the API.
    """

    username: String(required=True, max_length=50)
    password: String(required=True, max_length=255)
    wallet_address: String(max_length=255)
    created_at: DateTime()

    @classmethod
    def register(cls, username, password, wallet_address=None):
        now = datetime.now(UTC)
        user = cls(
            username=username,
            password=password,
            wallet_address=wallet_address,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                username=username,
                created_at=now,
            )
        )
        return user

    def connect_wallet(self, wallet_address):
        previous = self.wallet_address
        self.wallet_address = wallet_address
        self.raise_(
            WalletConnected(
                user_id=str(self.id),
                wallet_address=wallet_address,
                previous_wallet_address=previous,
            )
        )


@storefront.repository(part_of=User)
class UserRepository:
    def get_by_username(self, username: str) -> User | None:
        results = self._dao.query.filter(username=username).all().items
        return results[0] if results else None

    def get_by_wallet_address(self, wallet_address: str) -> User | None:
        results = self._dao.query.filter(wallet_address=wallet_address).all().items
        return results[0] if results else None

    def find(self, user_id) -> User | None:
        try:
            return self.get(user_id)
        except ObjectNotFoundError:
            return None
