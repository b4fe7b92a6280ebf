import io

from spatial_io import GeoJsonWriter

import pytest


class BrokenSink(io.StringIO):
    """A text sink that fails once it has accepted ``nb_writes`` writes."""

    def __init__(self, nb_writes: int = 0) -> None:
        super().__init__()
        self.nb_writes_left = nb_writes

    def write(self, s: str) -> int:
        if self.nb_writes_left <= 0:
            raise BrokenPipeError("sink is gone")
        self.nb_writes_left -= 1
        return super().write(s)


@pytest.fixture
def writer() -> GeoJsonWriter:
    return GeoJsonWriter()


@pytest.fixture
def broken_sink():
    return BrokenSink
