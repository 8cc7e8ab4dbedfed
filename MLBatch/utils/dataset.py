import copy
import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from functools import reduce

import lithops

from MLBatch.errors import EmptyDatasetError
from MLBatch.functions.worker import (AggregateJob, BernoulliSampler, CollectJob, CountJob, FirstJob,
                                      MapTransform, reducer, worker)
from MLBatch.utils.storage_backends import partition_key

logger = logging.getLogger(__name__)


class Dataset:
    """
    Immutable, partitioned collection of records.

    ``sample`` and ``map`` are lazy: they return a new dataset carrying one more
    per-partition transform. Actions (``aggregate``, ``first``, ``count``,
    ``collect``) ship the transform chain to every partition through ``_run``,
    which each execution backend implements.
    """

    def __init__(self, transforms=()):
        self.transforms = tuple(transforms)

    @property
    def n_partitions(self):
        raise NotImplementedError("Available in subclasses: LocalDataset, LithopsDataset")

    def sample(self, fraction, seed):
        return self._derive(BernoulliSampler(fraction, seed))

    def map(self, func):
        return self._derive(MapTransform(func))

    def aggregate(self, zero_value, seq_op, comb_op):
        """
        Folds every partition with ``seq_op`` starting from its own copy of ``zero_value``
        and combines the partial values with ``comb_op``, which must be associative and commutative.
        """
        job = AggregateJob(self.transforms, zero_value, seq_op, comb_op)
        return reduce(comb_op, self._run(job))

    def first(self):
        for record in self._run(FirstJob(self.transforms)):
            if record is not None:
                return record
        raise EmptyDatasetError("Cannot take the first record of an empty dataset")

    def count(self):
        return sum(self._run(CountJob(self.transforms)))

    def collect(self):
        records = []
        for part in self._run(CollectJob(self.transforms)):
            records.extend(part)
        return records

    def _derive(self, transform):
        derived = copy.copy(self)
        derived.transforms = self.transforms + (transform,)
        return derived

    def _run(self, job):
        raise NotImplementedError("Available in subclasses: LocalDataset, LithopsDataset")


class LocalDataset(Dataset):
    """
    Partitions held in memory, processed by a thread pool of ``n_threads`` workers.

    The pool lives as long as the dataset and is shared with every dataset derived
    from it through ``sample`` or ``map``; ``close`` shuts it down.
    """

    def __init__(self, partitions, n_threads=1):
        super().__init__()
        self.partitions = [list(p) for p in partitions] or [[]]
        self.n_threads = n_threads
        self.pool = ThreadPoolExecutor(max_workers=n_threads) if n_threads > 1 else None

    @classmethod
    def from_records(cls, records, n_partitions=1, n_threads=1):
        return cls(partition(records, n_partitions), n_threads=n_threads)

    @property
    def n_partitions(self):
        return len(self.partitions)

    def close(self):
        if self.pool is not None:
            self.pool.shutdown()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _run(self, job):
        indexes = range(len(self.partitions))
        if self.pool is not None:
            return list(self.pool.map(job, indexes, self.partitions))
        return list(map(job, indexes, self.partitions))


class LithopsDataset(Dataset):
    """
    Partitions processed by lithops functions, one function per partition.

    Without a storage backend the records travel with every invocation. With one
    (``RedisBackend`` or ``CosBackend``) they are uploaded once and each function
    fetches its own partition by key, so only the job is shipped per action.
    """

    def __init__(self, partitions, fexec, backend=None, bucket=None, **backend_params):
        super().__init__()
        self.fexec = fexec
        self.backend = backend
        self.dataset_id = uuid.uuid4().hex[:8]
        self.keys = []
        partitions = [list(p) for p in partitions] or [[]]

        if backend is None:
            self.payload = [{'index': i, 'records': p} for i, p in enumerate(partitions)]
            self.storage = None
        else:
            storage = lithops.Storage(config=fexec.config) if backend.needs_storage else None
            self.storage = backend(storage=storage, bucket=bucket, **backend_params)
            backend_params = {'bucket': bucket, **backend_params}
            self.payload = []
            for i, p in enumerate(partitions):
                key = partition_key(self.dataset_id, i)
                self.storage.put(key, p)
                self.keys.append(key)
                self.payload.append({'index': i, 'key': key, 'backend': backend, 'backend_params': backend_params})
            logger.info(f'Uploaded {len(partitions)} partitions of dataset {self.dataset_id}')

    @property
    def n_partitions(self):
        return len(self.payload)

    def aggregate(self, zero_value, seq_op, comb_op):
        job = AggregateJob(self.transforms, zero_value, seq_op, comb_op)
        futures = self.fexec.map_reduce(worker, self._iterdata(job), reducer)
        return self.fexec.get_result(futures)

    def clean(self):
        if self.storage is not None and self.keys:
            self.storage.delete(self.keys)
            self.keys = []

    def _run(self, job):
        futures = self.fexec.map(worker, self._iterdata(job))
        return [result['value'] for result in self.fexec.get_result(futures)]

    def _iterdata(self, job):
        return [{'args': {**p, 'job': job}} for p in self.payload]


def partition(records, n_partitions):
    """
    Splits records into ``n_partitions`` contiguous chunks whose sizes differ by at most one.
    """
    records = list(records)
    n_partitions = max(1, n_partitions)
    size, mod = divmod(len(records), n_partitions)
    parts = []
    start = 0
    for p in range(n_partitions):
        end = start + size + (1 if p < mod else 0)
        parts.append(records[start:end])
        start = end
    return parts
