class VisualizerError(Exception):
    """Base class for errors raised by the control surface."""


class InvalidParameterError(VisualizerError):
    """A start / regenerate request failed validation; nothing was changed."""


class RunInProgressError(VisualizerError):
    """The page already has an active run."""
