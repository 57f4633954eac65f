import io
import logging

import pytest

from stl2png.reporting import PlainReporter, set_reporter, set_verbosity


@pytest.fixture(autouse=True)
def _isolated_reporting():
    """Fresh reporter per test; drop handlers the CLI attaches."""
    stream = io.StringIO()
    set_reporter(PlainReporter(stream=stream, use_color=False))
    set_verbosity(0)
    yield stream
    logger = logging.getLogger("stl2png")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    set_verbosity(0)


@pytest.fixture
def report_stream(_isolated_reporting) -> io.StringIO:
    return _isolated_reporting


@pytest.fixture
def make_file(tmp_path):
    def _make(name: str, data: bytes):
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
        return p

    return _make
