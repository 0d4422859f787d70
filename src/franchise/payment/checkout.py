"""StartClaimCheckout: open a gateway checkout for an unclaimed brand."""

import structlog
from protean.fields import Identifier, String
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from franchise.account.account import Account
from franchise.brand.brand import Brand
from franchise.domain import franchise
from franchise.gateway import get_gateway

logger = structlog.get_logger(__name__)


@franchise.command(part_of="Brand")
class StartClaimCheckout:
    brand_id = Identifier(required=True)
    user_id = Identifier(required=True)
    return_url = String(required=True, max_length=1000)


@franchise.command_handler(part_of=Brand)
class StartClaimCheckoutHandler:
    @handle(StartClaimCheckout)
    def start_claim_checkout(self, command):
        brand = current_domain.repository_for(Brand).get(command.brand_id)
        brand.assert_claimable()
        account = current_domain.repository_for(Account).get(command.user_id)

        session = get_gateway().create_checkout_session(
            brand_id=str(brand.id),
            brand_name=brand.name,
            user_id=str(account.id),
            user_email=account.email,
            return_url=command.return_url,
        )
        logger.info(
            "claim_checkout_started",
            brand_id=str(brand.id),
            user_id=str(account.id),
            session_id=session.session_id,
        )
        return {"session_id": session.session_id, "client_secret": session.client_secret}
