import logging
import time
from dataclasses import dataclass
from numbers import Integral

import numpy as np

from MLBatch.errors import ConfigurationError, WrongNumberOfFeatures
from MLBatch.optimization.gradient import DTYPE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradientDescentOpts:
    step_size: float = 1.0
    num_iterations: int = 100
    reg_param: float = 0.0
    mini_batch_fraction: float = 1.0

    def __post_init__(self):
        if not self.step_size > 0:
            raise ConfigurationError(f"step_size must be positive, got {self.step_size}")
        if not isinstance(self.num_iterations, Integral) or self.num_iterations <= 0:
            raise ConfigurationError(f"num_iterations must be a positive integer, got {self.num_iterations}")
        if not self.reg_param >= 0:
            raise ConfigurationError(f"reg_param must be non-negative, got {self.reg_param}")
        if not 0 < self.mini_batch_fraction <= 1:
            raise ConfigurationError(f"mini_batch_fraction must be in (0, 1], got {self.mini_batch_fraction}")


class GradientSum:
    """
    Adds one record's gradient and loss to a partition accumulator ``(gradient_sum, loss_sum, count)``.

    Carries the weights of the current iteration to the workers; they are only read.
    """

    def __init__(self, gradient, weights):
        self.gradient = gradient
        self.weights = weights

    def __call__(self, acc, record):
        gradient_sum, loss_sum, count = acc
        label, features = record
        gradient, loss = self.gradient.compute(self.weights, label, features)
        gradient_sum += gradient
        return gradient_sum, loss_sum + loss, count + 1


def add_partials(a, b):
    return a[0] + b[0], a[1] + b[1], a[2] + b[2]


def run_mini_batch_sgd(data, gradient, updater, opts, initial_weights, seed=42):
    """
    Runs ``opts.num_iterations`` iterations of mini-batch SGD over ``data``.

    Each iteration keeps every record with probability ``opts.mini_batch_fraction``,
    sums gradients and losses of the sampled records across all partitions, and
    hands the averaged gradient to ``updater``. An iteration whose sample is empty
    leaves the weights untouched and records a loss of 0.

    :param data: Dataset of (label, features) records
    :param gradient: Gradient used per record
    :param updater: Updater producing the next weights
    :param opts: GradientDescentOpts
    :param initial_weights: starting weights, one per feature
    :param seed: base seed, iteration i samples with seed + i
    :return: (weights, loss_history)
    """
    weights = np.array(initial_weights, dtype=DTYPE)
    n_features = len(data.first()[1])
    if weights.shape != (n_features,):
        raise WrongNumberOfFeatures(
            f"Initial weights have length {len(weights)} but records have {n_features} features")

    loss_history = np.zeros(opts.num_iterations, dtype=DTYPE)
    t0 = time.time()

    for i in range(1, opts.num_iterations + 1):
        minibatch = data.sample(opts.mini_batch_fraction, seed + i)
        gradient_sum, loss_sum, minibatch_size = minibatch.aggregate(
            (np.zeros(n_features, dtype=DTYPE), 0.0, 0), GradientSum(gradient, weights), add_partials)

        if minibatch_size == 0:
            logger.debug("Iteration %s: empty mini-batch, weights unchanged", i)
            continue

        weights, reg_val = updater.compute(weights, gradient_sum / minibatch_size, opts.step_size, i,
                                           opts.reg_param)
        loss_history[i - 1] = loss_sum / minibatch_size + reg_val
        logger.debug("Iteration %s: mini-batch size=%s, loss=%s", i, minibatch_size, loss_history[i - 1])

    logger.info(f"Finished {opts.num_iterations} iterations of mini-batch SGD in {time.time() - t0} s")
    return weights, loss_history
