# grapeleaf/core/errors.py


class GrapeLeafError(Exception):
    """Base class for failures raised inside the analysis pipeline."""


class ImageDecodeError(GrapeLeafError):
    """The input could not be rendered onto the analysis grid."""


class ComputationError(GrapeLeafError):
    """A feature computation produced a non-finite or undefined value."""
