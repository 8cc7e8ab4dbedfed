import logging

import lithops

from MLBatch.algorithms import LogisticRegression
from MLBatch.utils.dataset import LithopsDataset, partition
from MLBatch.utils.loading import load_labeled_data
from MLBatch.utils.storage_backends import RedisBackend

logging.basicConfig(level=logging.INFO)

# Dataset specific parameters
dataset_dir = 'datasets/blobs'
n_workers = 8

# Partitions are uploaded once to Redis; every iteration only ships the current weights
fexec = lithops.FunctionExecutor(runtime_memory=2048)
data = LithopsDataset(partition(load_labeled_data(dataset_dir), n_workers), fexec,
                      backend=RedisBackend, redis_hosts=fexec.config['redis_hosts'])

alg = LogisticRegression(step_size=1.0, num_iterations=50, mini_batch_fraction=0.2)
try:
    alg.train(data)
    alg.generate_stats('blobs_lithops_results')
finally:
    data.clean()
    fexec.clean()
