import os

import numpy as np

from MLBatch.utils.loading import save_labeled_data

# Two gaussian blobs, one per class
n_samples = 10000
num_features = 10
seed = 8
dataset_dir = 'datasets/blobs'

rand = np.random.default_rng(seed)
labels = rand.integers(0, 2, n_samples)
centers = np.where(labels[:, None] == 1, 1.0, -1.0)
samples = rand.normal(centers, 1.5, (n_samples, num_features))

os.makedirs(dataset_dir, exist_ok=True)
save_labeled_data(zip(labels, samples), f'{dataset_dir}/part-00000')
print(f"Generated {n_samples} samples in {dataset_dir}")
