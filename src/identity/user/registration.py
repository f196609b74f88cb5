"""User registration and removal - commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.domain import identity, logger
from identity.user.user import User, UserRole
from shared.errors import ConflictError


@identity.command(part_of="User")
class RegisterUser:
    """Create an account. The password arrives already hashed."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.USER.value)


@identity.command(part_of="User")
class DeleteUser:
    account_id: Identifier(required=True)


@identity.command_handler(part_of=User)
class ManageUsersHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ConflictError("User with this email already exists")

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
            role=command.role,
        )
        repo.add(user)
        logger.info("user_registered", account_id=str(user.id), user_id=user.user_id, role=user.role)
        return str(user.id)

    @handle(DeleteUser)
    def delete_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.account_id)
        repo._dao.delete(user)
        logger.info("user_deleted", account_id=str(command.account_id))
