import pickle
import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from MLBatch.utils.dataset import LocalDataset  # noqa: E402
from MLBatch.utils.storage_backends import StorageBackend  # noqa: E402


class FakeFunctionExecutor:
    """
    Runs lithops-style ``map`` / ``map_reduce`` calls in this process.

    Every payload goes through pickle, as it would on its way to a remote function.
    """

    def __init__(self):
        self.config = {}
        self.calls = []
        self.cleaned = False

    def map(self, map_function, map_iterdata):
        self.calls.append('map')
        return 'map', self._invoke(map_function, map_iterdata)

    def map_reduce(self, map_function, map_iterdata, reduce_function):
        self.calls.append('map_reduce')
        results = self._invoke(map_function, map_iterdata)
        return 'reduce', reduce_function(pickle.loads(pickle.dumps(results)))

    def get_result(self, futures):
        _, result = futures
        return result

    def clean(self):
        self.cleaned = True

    @staticmethod
    def _invoke(function, iterdata):
        return [function(storage=None, **pickle.loads(pickle.dumps(data))) for data in iterdata]


class InMemoryBackend(StorageBackend):
    objects = {}

    def __init__(self, compression=True, **kwargs):
        super().__init__(compression)

    def _put(self, key, object_):
        InMemoryBackend.objects[key] = object_

    def _get(self, key):
        return InMemoryBackend.objects.get(key)

    def delete(self, keys):
        for key in keys:
            InMemoryBackend.objects.pop(key, None)


@pytest.fixture
def separable_records():
    return [(1, np.array([2.0])), (1, np.array([3.0])), (0, np.array([-2.0])), (0, np.array([-3.0]))]


@pytest.fixture
def blob_records():
    rand = np.random.default_rng(8)
    labels = rand.integers(0, 2, 400)
    samples = rand.normal(np.where(labels[:, None] == 1, 1.0, -1.0), 1.0, (400, 3))
    return [(int(label), sample) for label, sample in zip(labels, samples)]


@pytest.fixture
def blob_dataset(blob_records):
    return LocalDataset.from_records(blob_records, n_partitions=4)


@pytest.fixture
def fake_executor():
    return FakeFunctionExecutor()
