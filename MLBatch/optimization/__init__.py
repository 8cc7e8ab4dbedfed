from MLBatch.optimization.gradient import Gradient, LogisticGradient
from MLBatch.optimization.gradient_descent import GradientDescentOpts, run_mini_batch_sgd
from MLBatch.optimization.updater import L1Updater, SimpleUpdater, SquaredL2Updater, Updater
