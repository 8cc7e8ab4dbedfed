from math import exp, log, log1p

import numpy as np

DTYPE = np.float64
EPSILON = 10 ** -9


class Gradient:
    """
    Per-record loss and gradient of a linear model.
    """

    def compute(self, weights, label, features):
        """
        :param weights: current weight vector
        :param label: record label
        :param features: record feature vector, same length as weights
        :return: (gradient, loss) for this single record
        """
        raise NotImplementedError("Available in subclasses: LogisticGradient")


class LogisticGradient(Gradient):
    """
    Binary cross-entropy of a logistic model.
    """

    def compute(self, weights, label, features):
        margin = float(np.dot(weights, features))
        pred = sigmoid(margin)
        gradient = features * (pred - label)
        return gradient.astype(DTYPE, copy=False), loss_function(pred, label)


def loss_function(pred, label):
    return -(label * log(pred + EPSILON) + (1.0 - label) * log1p(-pred + EPSILON))


def sigmoid(z):
    if z >= 0:
        return 1.0 / (1.0 + exp(-z))
    e = exp(z)
    return e / (1.0 + e)
