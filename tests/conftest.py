import pytest
import requests

from fakes import FakeArray, make_client


@pytest.fixture
def array():
    return FakeArray()


@pytest.fixture
def client(array):
    client = make_client(array)
    client.session.authenticate()
    return client


@pytest.fixture
def transport_error():
    return requests.exceptions.ConnectionError("connection refused")
