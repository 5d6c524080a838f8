import pytest

from helpers import FakeEC2


@pytest.fixture
def ec2():
    return FakeEC2()
