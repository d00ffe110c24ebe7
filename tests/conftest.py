# tests/conftest.py
import pytest
import numpy as np

from lexrel.adapters.glove_adaptor import GloVeAdaptor
from lexrel.adapters.persistence.glove_binary import write_glove_binary
from lexrel.core.domain.models import VectorRecord

TOY_VECTORS = {
    "cat": [1.0, 0.0],
    "dog": [0.9, 0.1],
    "car": [0.0, 1.0],
}

def make_records(table):
    """Turns {word: components} (or a list of pairs) into VectorRecords."""
    items = table.items() if isinstance(table, dict) else table
    return [VectorRecord(word=w, vector=np.array(v, dtype=np.float64)) for w, v in items]

@pytest.fixture
def glove_folder_factory(tmp_path):
    """Returns a callable writing records into a fresh binary folder under tmp_path."""
    counter = {"n": 0}

    def _factory(table, name=None):
        counter["n"] += 1
        folder = tmp_path / (name or f"glove_{counter['n']}")
        write_glove_binary(make_records(table), folder)
        return folder

    return _factory

@pytest.fixture
def toy_folder(glove_folder_factory):
    """The cat/dog/car table as a binary folder."""
    return glove_folder_factory(TOY_VECTORS, name="toy")

@pytest.fixture
def toy_adaptor(toy_folder):
    """GloVe backend over the toy table, with the neighbour tree built."""
    adaptor = GloVeAdaptor.from_path(toy_folder, compute_neighbour_tree=True)
    yield adaptor
    adaptor.close()

@pytest.fixture
def seeded_vectors():
    """A reproducible mid-sized vocabulary for search tests."""
    rng = np.random.default_rng(7)
    matrix = rng.normal(size=(200, 8))
    return [(f"w{i}", row) for i, row in enumerate(matrix)]
