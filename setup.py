from setuptools import setup, find_packages

setup(name='MLBatch',
      version='0.1.0',
      description='Mini-batch SGD logistic regression over partitioned datasets, locally or on lithops',
      packages=find_packages(include=['MLBatch', 'MLBatch.*']),
      python_requires='>=3.8',
      install_requires=['numpy', 'lithops', 'redis'],
      extras_require={'test': ['pytest']},
      entry_points={'console_scripts': ['mlbatch-lr=MLBatch.cli:main']})
