class FilterError(Exception):
    """
    Base class for failures raised while applying a single filter step.
    """


class InvalidBuffer(FilterError):
    """
    Buffer has the wrong type, shape, dtype or byte length.
    """


class OutOfRangeParameter(FilterError):
    """
    Parameter lies outside the mathematical domain of a filter.
    """


class ComputationFailure(FilterError):
    """
    Filter math is undefined for the given input (e.g. zero adaptive threshold).
    """
