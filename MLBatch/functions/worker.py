import copy
import time
import logging

import numpy as np

logger = logging.getLogger(__name__)


class BernoulliSampler:
    """
    Keeps every record independently with probability ``fraction``.

    The random stream depends only on the seed and the partition index, so the
    same sample is drawn regardless of where or in which order partitions run.
    """

    def __init__(self, fraction, seed):
        self.fraction = fraction
        self.seed = seed

    def __call__(self, index, records):
        if self.fraction >= 1.0:
            yield from records
            return
        rand = np.random.default_rng([self.seed, index])
        for record in records:
            if rand.random() < self.fraction:
                yield record


class MapTransform:
    def __init__(self, func):
        self.func = func

    def __call__(self, _, records):
        for record in records:
            yield self.func(record)


class PartitionJob:
    """
    Work shipped to a partition: a chain of lazy transforms and a final action.
    """

    def __init__(self, transforms):
        self.transforms = transforms

    def records(self, index, records):
        for transform in self.transforms:
            records = transform(index, records)
        return records

    def __call__(self, index, records):
        raise NotImplementedError("Available in subclasses: AggregateJob, CollectJob, FirstJob, CountJob")


class AggregateJob(PartitionJob):
    def __init__(self, transforms, zero_value, seq_op, comb_op):
        super().__init__(transforms)
        self.zero_value = zero_value
        self.seq_op = seq_op
        self.comb_op = comb_op

    def __call__(self, index, records):
        acc = copy.deepcopy(self.zero_value)
        for record in self.records(index, records):
            acc = self.seq_op(acc, record)
        return acc


class CollectJob(PartitionJob):
    def __call__(self, index, records):
        return list(self.records(index, records))


class FirstJob(PartitionJob):
    def __call__(self, index, records):
        for record in self.records(index, records):
            return record
        return None


class CountJob(PartitionJob):
    def __call__(self, index, records):
        return sum(1 for _ in self.records(index, records))


def worker(storage, args):
    """
    Generic partition cloud function.
    :param storage: Lithops Storage instance. Provides the function access to the selected storage backend
                    in the configuration

    :param args: partition index, job, and either the partition records or the key to fetch them from
    """
    t0 = time.time()
    index = args['index']
    job = args['job']

    records = args.get('records')
    if records is None:
        backend = args['backend'](storage=storage, **args['backend_params'])
        records = backend.get(args['key'])

    result = job(index, records)
    logger.debug('Partition %s processed in %s s', index, time.time() - t0)
    return {'comb_op': getattr(job, 'comb_op', None), 'value': result}


def reducer(results):
    """
    Combines the partial values returned by every partition, in partition order.
    """
    comb_op = results[0]['comb_op']
    value = results[0]['value']
    for result in results[1:]:
        value = comb_op(value, result['value'])
    return value
