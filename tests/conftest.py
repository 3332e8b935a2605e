import pytest

from reqbind.binding.validation import Validator


@pytest.fixture()
def validator():
    """A fresh validator with the default rule set and create/update groups."""
    return Validator()
