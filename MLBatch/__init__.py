from MLBatch.algorithms import LogisticRegression, LogisticRegressionModel
from MLBatch.errors import ConfigurationError, EmptyDatasetError, WrongNumberOfFeatures
from MLBatch.optimization import GradientDescentOpts, run_mini_batch_sgd
from MLBatch.utils.dataset import LithopsDataset, LocalDataset
