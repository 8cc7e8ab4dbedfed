class ConfigurationError(ValueError):
    pass


class WrongNumberOfFeatures(ConfigurationError):
    pass


class EmptyDatasetError(ValueError):
    pass
