import bibsync
from bibsync.version import get_version


def test_version_is_exposed() -> None:
    version = get_version()

    assert version
    assert bibsync.__version__ == version
