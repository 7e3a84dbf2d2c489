import pytest
from tagcrypt_core.crypto import random_key
from tagcrypt_core.tagpairs import TagPair, TagPairs


@pytest.fixture
def key():
    return random_key()


@pytest.fixture
def pairs():
    return TagPairs([TagPair("work", "r1"), TagPair("home", "r2")])
