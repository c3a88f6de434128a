# mazerun/errors.py
"""Exception hierarchy for maze loading and search."""


class MazeError(Exception):
    """Base class for every error raised by mazerun."""


class ConfigurationError(MazeError, ValueError):
    """The grid cannot be searched: missing or duplicate Start/End."""


class MazeFormatError(ConfigurationError):
    """Maze text is malformed (ragged rows, unknown symbols, empty input)."""


class SearchInProgressError(MazeError, RuntimeError):
    """A strategy was invoked while another one is still running on the grid."""


class PathUnavailableError(MazeError, RuntimeError):
    """A route was requested but the last search did not reach the end."""
