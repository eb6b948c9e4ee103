"""
Shared fixtures for the fieldrules test suite.
"""

import pytest

from fieldrules.validation import Validator, default_registry
from fieldrules.validation import engine

from .records import User


@pytest.fixture
def validator():
    """Independent validator with the builtin rules and default keys."""
    return Validator(registry=default_registry())


@pytest.fixture
def sample_user():
    return User(Username="something", Name="", Age=20, Password="short")


@pytest.fixture
def restore_default_validator():
    """Snapshot the module-level default validator and put it back afterwards."""
    default = engine.default_validator()
    saved = (default.registry.copy(), default.tag, default.name_tag, default.read_name_tag)
    yield default
    default.registry, default.tag, default.name_tag, default.read_name_tag = saved
