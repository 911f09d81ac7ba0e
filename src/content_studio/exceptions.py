"""Error taxonomy for the content studio."""


class StudioError(Exception):
    """Base class for all content studio errors."""


class ValidationError(StudioError):
    """Local precondition failed before any API call was made."""


class GenerationError(StudioError):
    """Text generation call failed or returned unparseable content."""


class ImageGenerationError(StudioError):
    """Every configured image model failed."""


class StoreError(StudioError):
    """Project store could not read or write a value."""


class PermissionDeniedError(StudioError):
    """The acting user lacks the role required for an operation."""


class BusyError(StudioError):
    """A generation call is already in flight for this controller."""


class BulkAbortError(StudioError):
    """Bulk section regeneration stopped after a section failed.

    Attributes:
        failed_indices: Script indices whose content call failed
        completed: Number of sections committed before the abort
        total: Number of unfilled sections the run started with
    """

    def __init__(
        self,
        message: str,
        failed_indices: list[int],
        completed: int,
        total: int,
    ) -> None:
        super().__init__(message)
        self.failed_indices = failed_indices
        self.completed = completed
        self.total = total
