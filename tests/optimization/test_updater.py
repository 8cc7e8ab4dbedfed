import math

import numpy as np
import pytest

from MLBatch.optimization.updater import L1Updater, SimpleUpdater, SquaredL2Updater


@pytest.mark.parametrize("iteration", [1, 2, 4, 9, 100])
@pytest.mark.parametrize("scale", [1.0, 1000.0])
def test_simple_step_decays_with_square_root_of_iteration(iteration, scale):
    weights = np.zeros(3)
    gradient = np.full(3, scale)
    new_weights, reg_val = SimpleUpdater().compute(weights, gradient, 2.0, iteration, 0.0)

    np.testing.assert_array_equal(new_weights, -(2.0 / math.sqrt(iteration)) * gradient)
    assert reg_val == 0.0


def test_simple_updater_ignores_reg_param_and_keeps_input():
    weights = np.array([1.0, -1.0])
    new_weights, reg_val = SimpleUpdater().compute(weights, np.array([0.5, 0.5]), 1.0, 1, 10.0)

    np.testing.assert_array_equal(new_weights, [0.5, -1.5])
    np.testing.assert_array_equal(weights, [1.0, -1.0])
    assert reg_val == 0.0


def test_squared_l2_shrinks_weights():
    new_weights, reg_val = SquaredL2Updater().compute(np.array([1.0, -2.0]), np.zeros(2), 1.0, 1, 0.5)

    np.testing.assert_allclose(new_weights, [0.5, -1.0])
    assert reg_val == pytest.approx(0.5 * 0.5 * (0.25 + 1.0))


def test_l1_soft_thresholds_towards_zero():
    new_weights, reg_val = L1Updater().compute(np.array([1.0, -0.2, -3.0]), np.zeros(3), 1.0, 1, 0.5)

    np.testing.assert_allclose(new_weights, [0.5, 0.0, -2.5])
    assert reg_val == pytest.approx(0.5 * 3.0)
