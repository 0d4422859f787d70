"""RegisterAccount / VerifyAccount: member records used by the review and claim flows."""

from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from franchise.account.account import Account
from franchise.domain import franchise


@franchise.command(part_of="Account")
class RegisterAccount:
    email = String(required=True, max_length=255)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    role = String(max_length=20, default="browser")


@franchise.command(part_of="Account")
class VerifyAccount:
    account_id = Identifier(required=True)


@franchise.command_handler(part_of=Account)
class AccountCommandHandler:
    @handle(RegisterAccount)
    def register_account(self, command):
        repo = current_domain.repository_for(Account)

        email = command.email.strip().lower()
        existing = repo._dao.query.filter(email=email).all()
        if existing.items:
            raise ValidationError({"email": ["An account with this email already exists"]})

        account = Account.register(
            email=email,
            first_name=command.first_name,
            last_name=command.last_name,
            role=command.role or "browser",
        )
        repo.add(account)
        return str(account.id)

    @handle(VerifyAccount)
    def verify_account(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.get(command.account_id)
        account.verify()
        repo.add(account)
