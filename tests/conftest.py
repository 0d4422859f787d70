import os
from pathlib import Path
from uuid import uuid4

import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture

_INTEGRATION_ENV_VARS = (
    "OPENAI_API_KEY",
    "OPENAI_TIMEOUT",
    "OPENAI_MAX_RETRIES",
    "STRIPE_SECRET_KEY",
    "STRIPE_WEBHOOK_SECRET",
    "POSTMARK_API_TOKEN",
)


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


def _reset_adapters():
    from franchise.channel import reset_email_channel
    from franchise.classifier import reset_classifier
    from franchise.gateway import reset_gateway
    from franchise.notification.notifier import reset_notifier

    reset_classifier()
    reset_gateway()
    reset_email_channel()
    reset_notifier()


@pytest.fixture(scope="session")
def franchise_bed():
    from franchise.domain import franchise

    bed = DomainFixture(franchise)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(franchise_bed, monkeypatch):
    for var in _INTEGRATION_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    _reset_adapters()

    with franchise_bed.domain_context():
        yield

        # Clear all databases and drain the event store
        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()

    _reset_adapters()


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------
@pytest.fixture()
def fake_email():
    from franchise.channel import set_email_channel
    from franchise.channel.fake_email import FakeEmailAdapter

    adapter = FakeEmailAdapter()
    set_email_channel(adapter)
    return adapter


@pytest.fixture()
def fake_classifier():
    from franchise.classifier import set_classifier
    from franchise.classifier.fake_adapter import FakeClassifier

    classifier = FakeClassifier()
    set_classifier(classifier)
    return classifier


@pytest.fixture()
def fake_gateway():
    from franchise.gateway import set_gateway
    from franchise.gateway.fake_adapter import FakeGateway

    gateway = FakeGateway()
    set_gateway(gateway)
    return gateway


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_account():
    from franchise.account.registration import RegisterAccount, VerifyAccount

    def _make(email=None, role="franchisee", verified=False, first_name="Test", last_name="Member"):
        account_id = current_domain.process(
            RegisterAccount(
                email=email or f"member-{uuid4().hex[:8]}@example.com",
                first_name=first_name,
                last_name=last_name,
                role=role,
            ),
            asynchronous=False,
        )
        if verified:
            current_domain.process(VerifyAccount(account_id=account_id), asynchronous=False)
        return account_id

    return _make


@pytest.fixture()
def make_brand():
    from franchise.brand.listing import ListBrand

    def _make(name=None, category="Food & Beverage"):
        return current_domain.process(
            ListBrand(name=name or f"Brand {uuid4().hex[:8]}", category=category),
            asynchronous=False,
        )

    return _make


@pytest.fixture()
def make_review(make_account, make_brand):
    from franchise.review.submission import SubmitReview

    def _make(brand_id=None, author_id=None, overall=4, title="Solid franchise", content=None, **ratings):
        command = SubmitReview(
            brand_id=brand_id or make_brand(),
            author_id=author_id or make_account(),
            title=title,
            content=content or "Training was thorough and the support team answers quickly.",
            overall_rating=overall,
            support_rating=ratings.get("support"),
            training_rating=ratings.get("training"),
            profitability_rating=ratings.get("profitability"),
            culture_rating=ratings.get("culture"),
            years_as_franchisee=ratings.get("years_as_franchisee"),
        )
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def admin_id(make_account):
    return make_account(email="moderator@example.com", role="admin")


@pytest.fixture()
def moderate(admin_id):
    from franchise.review.moderation import ModerateReview

    def _moderate(review_id, action="approve", moderator_id=None, notes=None):
        moderator_id = moderator_id or admin_id
        return current_domain.process(
            ModerateReview(review_id=review_id, moderator_id=moderator_id, action=action, notes=notes),
            asynchronous=False,
        )

    return _moderate


@pytest.fixture()
def claim_brand(make_account):
    """Hand a brand to a new franchisor through a completed claim payment."""
    from franchise.payment.webhook import ApplyClaimPayment

    def _claim(brand_id, user_id=None, session_id=None):
        user_id = user_id or make_account(role="franchisor")
        current_domain.process(
            ApplyClaimPayment(
                gateway_session_id=session_id or f"cs_test_{uuid4().hex[:16]}",
                brand_id=brand_id,
                user_id=user_id,
                amount=9900,
                currency="usd",
            ),
            asynchronous=False,
        )
        return user_id

    return _claim
