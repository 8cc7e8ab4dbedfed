import logging

logger = logging.getLogger(__name__)


class TrainingObserver:
    """
    Notified once, after a training run has produced its model.
    """

    def on_train_end(self, model):
        pass


class LoggingObserver(TrainingObserver):
    def __init__(self, n_losses=10, log=None):
        self.n_losses = n_losses
        self.log = log if log is not None else logger

    def on_train_end(self, model):
        self.log.info("Final model weights " + ",".join(str(w) for w in model.weights))
        self.log.info(f"Final model intercept {model.intercept}")
        self.log.info(f"Last {self.n_losses} stochastic losses "
                      + ", ".join(str(loss) for loss in model.loss_history[-self.n_losses:]))
