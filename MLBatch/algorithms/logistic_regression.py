import numpy as np

from MLBatch.algorithms.base import Base
from MLBatch.errors import WrongNumberOfFeatures
from MLBatch.optimization.gradient import DTYPE, LogisticGradient, sigmoid
from MLBatch.optimization.gradient_descent import run_mini_batch_sgd
from MLBatch.optimization.updater import SimpleUpdater
from MLBatch.utils.dataset import Dataset


class LogisticRegression(Base):
    """
    Logistic Regression SGD
    """

    def __init__(self, updater=None, **kwargs):
        super().__init__(**kwargs)
        self.gradient = LogisticGradient()
        self.updater = updater if updater is not None else SimpleUpdater()

    @classmethod
    def train_model(cls, data, num_iterations, step_size=1.0, mini_batch_fraction=1.0, initial_weights=None,
                    **kwargs):
        """
        Trains with a fixed number of iterations; full-batch gradient descent unless a fraction is given.
        """
        alg = cls(step_size=step_size, num_iterations=num_iterations, mini_batch_fraction=mini_batch_fraction,
                  **kwargs)
        return alg.train(data, initial_weights)

    def _train(self, data, initial_weights):
        num_features = len(data.first()[1])
        if initial_weights is None:
            initial_weights = np.ones(num_features, dtype=DTYPE)
        initial_weights = np.asarray(initial_weights, dtype=DTYPE)
        if initial_weights.shape != (num_features,):
            raise WrongNumberOfFeatures(
                f"Expected {num_features} initial weights, one per feature, got {len(initial_weights)}")

        # The intercept is learned as the weight of a constant 1.0 feature
        data = data.map(add_intercept)
        initial_weights = np.concatenate(([1.0], initial_weights))

        weights, loss_history = run_mini_batch_sgd(data, self.gradient, self.updater, self.opts, initial_weights,
                                                   seed=self.seed)

        return LogisticRegressionModel(weights[1:], weights[0], loss_history)


class LogisticRegressionModel:
    def __init__(self, weights, intercept, loss_history):
        self._weights = np.array(weights, dtype=DTYPE)
        self._weights.flags.writeable = False
        self._intercept = float(intercept)
        self._loss_history = np.array(loss_history, dtype=DTYPE)
        self._loss_history.flags.writeable = False

    @property
    def weights(self):
        return self._weights

    @property
    def intercept(self):
        return self._intercept

    @property
    def loss_history(self):
        return self._loss_history

    def predict(self, features):
        return LinearClassifier(self._weights, self._intercept)(features)

    def predict_batch(self, data):
        """
        Predicts a label for every feature vector.

        A ``Dataset`` is mapped lazily and only the weights and intercept travel to its
        partitions; any other iterable is predicted in place and returned as a list.
        """
        classifier = LinearClassifier(self._weights, self._intercept)
        if isinstance(data, Dataset):
            return data.map(classifier)
        return [classifier(features) for features in data]


class LinearClassifier:
    # p == 0.5 rounds up to 1
    def __init__(self, weights, intercept):
        self.weights = weights
        self.intercept = intercept

    def __call__(self, features):
        margin = float(np.dot(self.weights, np.asarray(features, dtype=DTYPE))) + self.intercept
        return 1 if sigmoid(margin) >= 0.5 else 0


def add_intercept(record):
    label, features = record
    return float(label), np.concatenate(([1.0], np.asarray(features, dtype=DTYPE)))
