"""User registration and wallet connection — commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import logger, storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class RegisterUser:
    username: String(required=True, max_length=50)
    password: String(required=True, max_length=255)
    wallet_address: String(max_length=255)


@storefront.command(part_of="User")
class ConnectWallet:
    """Attach a wallet address to an account, replacing any previous one."""

    user_id: Identifier(required=True)
    wallet_address: String(required=True, max_length=255)


@storefront.command_handler(part_of=User)
class ManageUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        if repo.get_by_username(command.username) is not None:
            raise ValidationError({"username": ["Username is already taken"]})

        user = User.register(
            username=command.username,
            password=command.password,
            wallet_address=command.wallet_address,
        )
        repo.add(user)
        logger.info("user.registered", user_id=str(user.id))
        return str(user.id)

    @handle(ConnectWallet)
    def connect_wallet(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.connect_wallet(command.wallet_address)
        repo.add(user)
