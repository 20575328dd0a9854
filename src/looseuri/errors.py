"""Exceptions raised by looseuri. Both subclass ValueError."""


class ParseError(ValueError):
    """The grammar could not match, or a host/port was rejected during normalization."""


class ArgumentError(ValueError):
    """A mutator was given a value that is not a partial authority of the expected shape."""
