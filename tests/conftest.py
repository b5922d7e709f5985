import pytest

from horizonsjax.config import DEFAULT_DTYPE, set_dtype


@pytest.fixture(autouse=True)
def _restore_default_dtype():
    """Put the module-wide dtype back to its default after every test.

    Tests run under the library default; the few that switch precision
    must not leak it into the rest of the session.
    """
    yield
    set_dtype(DEFAULT_DTYPE)
