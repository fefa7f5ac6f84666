import pytest

from fakes import make_profile
from resumeaid.models.profile import Profile


@pytest.fixture
def profile() -> Profile:
    return make_profile()
