import logging

from MLBatch.algorithms import LogisticRegression
from MLBatch.utils.dataset import LocalDataset
from MLBatch.utils.loading import load_labeled_data

logging.basicConfig(level=logging.INFO)

# Dataset specific parameters
dataset_dir = 'datasets/blobs'
n_partitions = 4

# Run LR job on 4 local threads, 10% of the data per iteration
data = LocalDataset.from_records(load_labeled_data(dataset_dir), n_partitions=n_partitions, n_threads=n_partitions)
alg = LogisticRegression(step_size=1.0, num_iterations=100, mini_batch_fraction=0.1)

model = alg.train(data)
alg.generate_stats('blobs_results')

records = data.collect()
predictions = model.predict_batch([features for _, features in records])
accuracy = sum(p == label for p, (label, _) in zip(predictions, records)) / len(records)
print(f"Training accuracy: {accuracy}")
