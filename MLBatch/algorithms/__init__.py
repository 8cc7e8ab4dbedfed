from MLBatch.algorithms.logistic_regression import LogisticRegression, LogisticRegressionModel
