import os

import numpy as np

from MLBatch.optimization.gradient import DTYPE


def load_labeled_data(path, separator=','):
    """
    Reads labeled records from a file, or from every visible file of a directory.

    Each non-empty line holds ``label<separator>f1 f2 ... fF``, with labels 0 or 1.
    :return: list of (label, features) records
    """
    if os.path.isdir(path):
        filenames = sorted(os.path.join(path, f) for f in os.listdir(path)
                           if not f.startswith(('.', '_')) and os.path.isfile(os.path.join(path, f)))
    else:
        filenames = [path]

    records = []
    for filename in filenames:
        with open(filename, 'r') as file:
            for n, line in enumerate(file, start=1):
                line = line.strip()
                if line == '':
                    continue
                try:
                    records.append(_parse(line, separator))
                except ValueError as e:
                    raise ValueError(f"{filename}:{n}: {e}") from e
    return records


def save_labeled_data(records, path, separator=','):
    with open(path, 'w') as file:
        for label, features in records:
            file.write('{}{}{}\n'.format(int(label), separator, ' '.join(repr(float(f)) for f in features)))


def _parse(line, separator):
    label, _, features = line.partition(separator)
    label = float(label)
    if label not in (0.0, 1.0):
        raise ValueError(f"label must be 0 or 1, got {label}")
    features = np.array([float(f) for f in features.split()], dtype=DTYPE)
    return int(label), features
