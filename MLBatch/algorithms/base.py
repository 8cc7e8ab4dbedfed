import csv
import json
import logging
import time

from MLBatch.optimization.gradient_descent import GradientDescentOpts
from MLBatch.utils.observers import LoggingObserver

logger = logging.getLogger(__name__)


class Base:
    def __init__(self, step_size=1.0, num_iterations=100, reg_param=0.0, mini_batch_fraction=1.0, seed=42,
                 observers=None):
        # Validated once, immutable afterwards
        self.opts = GradientDescentOpts(step_size, num_iterations, reg_param, mini_batch_fraction)
        self.seed = seed  # minibatch pseudo-random selection
        self.observers = list(observers) if observers is not None else [LoggingObserver()]

        # After-training data and statistics
        self.model = None
        self.loss_history = None
        self.total_train_time = 0.0

    def train(self, data, initial_weights=None):
        logger.info(f"Starting training - {data.n_partitions} partitions, {self.opts.num_iterations} iterations.")
        init_time = time.time()
        self.model = self._train(data, initial_weights)
        self.total_train_time = time.time() - init_time
        self.loss_history = self.model.loss_history

        for observer in self.observers:
            observer.on_train_end(self.model)

        logger.info("Elapsed training time: %f s" % self.total_train_time)
        return self.model

    def _train(self, data, initial_weights):
        raise NotImplementedError("Available in subclasses: LogisticRegression")

    def generate_stats(self, file_prefix, get_loss_history=True, get_times_json=True):
        if self.model is None:
            raise RuntimeError("generate_stats requires a trained model, call train first")

        if get_times_json:
            with open(f"{file_prefix}.json", 'w') as file:
                results_dict = {'total_train_time': self.total_train_time,
                                'num_iterations': self.opts.num_iterations,
                                'step_size': self.opts.step_size,
                                'mini_batch_fraction': self.opts.mini_batch_fraction,
                                'final_loss': float(self.loss_history[-1])}
                json.dump(results_dict, file, indent=4)
            logger.info(f"Generated results file: {file_prefix}.json.")

        if get_loss_history:
            with open(f"{file_prefix}_loss-history.csv", 'w', newline='') as file:
                writer = csv.writer(file)
                writer.writerow(['step', 'loss'])
                writer.writerows([step, loss] for step, loss in enumerate(self.loss_history, start=1))
            logger.info(f"Generated results file: {file_prefix}_loss-history.csv.")
