"""Exceptions raised by the cleaning pipeline."""


class PipelineError(Exception):
    """Base class for fatal pipeline failures."""


class MalformedDateError(PipelineError, ValueError):
    """A present ``date`` value could not be parsed as a calendar date."""

    def __init__(self, value: object, index: object = None) -> None:
        self.value = value
        self.index = index
        location = f" at row {index!r}" if index is not None else ""
        super().__init__(f"Cannot parse date {value!r}{location}")


class InsufficientDataError(PipelineError):
    """Fewer clean rows are available than the requested sample size."""

    def __init__(self, available: int, required: int) -> None:
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient data: {available} clean rows available, {required} required for sampling"
        )
