import logging
import os
import re
import sys

import lithops

from MLBatch.algorithms.logistic_regression import LogisticRegression
from MLBatch.errors import ConfigurationError
from MLBatch.utils.dataset import LithopsDataset, LocalDataset, partition
from MLBatch.utils.loading import load_labeled_data

USAGE = "Usage: LogisticRegression <master> <input_dir> <step_size> <regularization_parameter> <niters>"
MASTER_PATTERN = re.compile(r'^(local|lithops|lithops-local)(?:\[(\d+|\*)\])?$')
DEFAULT_LITHOPS_PARTITIONS = 4


def get_dataset(master, records):
    """
    Builds the dataset for an execution target: ``local[N]`` runs N threads in this
    process, ``lithops[N]`` and ``lithops-local[N]`` run N partitions as lithops functions.
    """
    match = MASTER_PATTERN.match(master)
    if match is None:
        raise ConfigurationError(f"Unknown master '{master}'")

    kind, n = match.groups()
    if n == '*':
        n = os.cpu_count() or 1
    elif n is not None:
        n = int(n)
        if n == 0:
            raise ConfigurationError(f"Master '{master}' needs at least one partition")

    if kind == 'local':
        n = n or 1
        return LocalDataset.from_records(records, n_partitions=n, n_threads=n)

    if kind == 'lithops-local':
        fexec = lithops.LocalhostExecutor()
    else:
        fexec = lithops.FunctionExecutor()
    return LithopsDataset(partition(records, n or DEFAULT_LITHOPS_PARTITIONS), fexec)


def run(argv):
    """
    Trains from ``<master> <input_dir> <step_size> <regularization_parameter> <niters>``
    and returns the model.
    """
    args = list(argv)
    if len(args) != 5:
        print(USAGE)
        sys.exit(1)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s [%(levelname)s] %(name)s: %(message)s')

    master, input_dir, step_size, reg_param, n_iters = args
    data = get_dataset(master, load_labeled_data(input_dir))
    alg = LogisticRegression(step_size=float(step_size), num_iterations=int(n_iters), reg_param=float(reg_param))
    try:
        return alg.train(data)
    finally:
        if isinstance(data, LithopsDataset):
            data.fexec.clean()
        elif isinstance(data, LocalDataset):
            data.close()


def main(argv=None):
    run(sys.argv[1:] if argv is None else argv)
    return 0
