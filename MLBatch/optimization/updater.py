from math import sqrt

import numpy as np


class Updater:
    """
    Combines an averaged gradient with the current weights.

    ``compute`` returns a new weight vector and the regularization value of the
    new weights; the input weights are never modified.
    """

    def compute(self, weights, gradient, step_size, iteration, reg_param):
        raise NotImplementedError("Available in subclasses: SimpleUpdater, L1Updater, SquaredL2Updater")

    @staticmethod
    def step(step_size, iteration):
        # iteration is 1-based
        return step_size / sqrt(iteration)


class SimpleUpdater(Updater):
    def compute(self, weights, gradient, step_size, iteration, reg_param):
        step = self.step(step_size, iteration)
        return weights - step * gradient, 0.0


class L1Updater(Updater):
    """
    Gradient step followed by soft thresholding of every weight by step * reg_param.
    """

    def compute(self, weights, gradient, step_size, iteration, reg_param):
        step = self.step(step_size, iteration)
        new_weights = weights - step * gradient
        shrinkage = reg_param * step
        new_weights = np.sign(new_weights) * np.maximum(np.abs(new_weights) - shrinkage, 0.0)
        return new_weights, reg_param * float(np.sum(np.abs(new_weights)))


class SquaredL2Updater(Updater):
    """
    Gradient step on the loss plus (reg_param / 2) * ||w||^2.
    """

    def compute(self, weights, gradient, step_size, iteration, reg_param):
        step = self.step(step_size, iteration)
        new_weights = weights * (1.0 - step * reg_param) - step * gradient
        return new_weights, 0.5 * reg_param * float(np.dot(new_weights, new_weights))
