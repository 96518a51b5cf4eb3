"""Exception types raised by HexGlobe."""


class HexGlobeError(Exception):
    """Base class for all HexGlobe errors."""


class ConfigError(HexGlobeError):
    """An environment override could not be parsed."""


class GridInvariantError(HexGlobeError):
    """The grid-index provider violated a structural guarantee.

    Raised at start-up when the base resolution does not enumerate the
    expected number of cells; rendering a partial globe is never attempted.
    """

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected {expected} base cells from the grid provider, got {actual}")
