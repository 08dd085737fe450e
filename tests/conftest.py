import pytest

from converter.rates import RateTable


@pytest.fixture()
def table():
    return RateTable.from_mapping({"USD": 1, "PKR": 278.5, "EUR": 0.92}, base="USD")


class StubClient:
    """Stands in for ExchangeRateClient; returns `payload` or raises `exc`."""

    def __init__(self, payload=None, exc=None):
        self.payload = payload
        self.exc = exc
        self.calls = 0

    def latest(self):
        self.calls += 1
        if self.exc is not None:
            raise self.exc
        return self.payload


@pytest.fixture()
def stub_client():
    return StubClient
