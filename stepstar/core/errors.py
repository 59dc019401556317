# stepstar/core/errors.py
#!/usr/bin/env python3


class StepstarError(Exception):
    """Base class for errors raised by the search kernel and its loaders."""


class InvalidStartOrGoal(StepstarError, ValueError):
    """Start or goal lies outside the grid or on a blocked cell."""


class ReconstructBeforeSuccess(StepstarError, RuntimeError):
    """A path was requested from a run that has not reached its goal."""


class MapFormatError(StepstarError, ValueError):
    """A map file is missing fields or has inconsistent dimensions."""
