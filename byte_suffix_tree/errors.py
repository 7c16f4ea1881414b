'''Exception types raised while building or reading a suffix tree.

Classes:
    SuffixTreeError: Base class for every error raised by this package.
    CapacityError: A payload length, offset or node index does not fit the
                   compact reference encoding.
    InternalConsistencyError: An invariant of the construction was violated.
                              This indicates a defect in the algorithm, and the
                              tree being built must be discarded.
'''


class SuffixTreeError(Exception):
    """Base class for suffix tree errors."""


class CapacityError(SuffixTreeError, OverflowError):
    """Raised when a value exceeds what the reference encoding can address.

    Raised before the offending value is stored anywhere, so no partially
    encoded reference ever reaches the arena.
    """


class InternalConsistencyError(SuffixTreeError, RuntimeError):
    """Raised when a construction invariant does not hold.

    These checks are plain `if` tests rather than `assert` statements so that
    they stay active when Python runs with `-O`.
    """


def check(condition: bool, message: str) -> None:
    """Raises InternalConsistencyError with `message` unless `condition` holds."""
    if not condition:
        raise InternalConsistencyError(message)
