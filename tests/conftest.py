import pytest

from digits import DEFAULT_CHARSET

HEX_CHARSET = "0123456789ABCDEF"


@pytest.fixture
def charset():
    return DEFAULT_CHARSET


@pytest.fixture
def hex_charset():
    return HEX_CHARSET


@pytest.fixture
def write_file(tmp_path):
    """Write text to a file under tmp_path and return its path as a string."""

    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return str(path)

    return _write
