class PinfoplotError(Exception):
    """Base class for every failure that aborts a sampling/rendering run."""


class InsufficientSamplesError(PinfoplotError):
    """The sampling configuration cannot produce at least two samples."""


class ProcessNotFoundError(PinfoplotError):
    pass


class MetricQueryError(PinfoplotError):
    """A memory, I/O or CPU query failed while the run was in progress."""


class EmptyPlotError(PinfoplotError):
    pass


class EmptyGridError(PinfoplotError):
    pass


class InvalidDimensionError(PinfoplotError):
    pass


class WriteError(PinfoplotError):
    pass
