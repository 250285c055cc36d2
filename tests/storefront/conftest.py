import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront

    bed = DomainFixture(storefront)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()


@pytest.fixture()
def add_product():
    """Create a product through the ``AddProduct`` command and return it."""
    from protean import current_domain

    from storefront.catalogue.creation import AddProduct

    def _add(name="Wireless Mouse", price=25.99, stock=10, **extra):
        return current_domain.process(
            AddProduct(name=name, price=price, stock=stock, **extra),
            asynchronous=False,
        )

    return _add


@pytest.fixture()
def always_decline():
    """Install a gateway that declines every charge."""
    from storefront.payments.gateway import set_gateway
    from storefront.payments.gateway.simulated_adapter import SimulatedGateway

    gateway = SimulatedGateway(success_rate=0.0)
    set_gateway(gateway)
    return gateway


@pytest.fixture()
def recording_gateway():
    """Install a gateway that approves every charge and keeps a call log."""
    from storefront.payments.gateway import set_gateway
    from storefront.payments.gateway.simulated_adapter import SimulatedGateway

    gateway = SimulatedGateway(always_succeed=True)
    set_gateway(gateway)
    return gateway
