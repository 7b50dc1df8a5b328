"""Domain exceptions raised by the core and caught at the UI boundary."""

from enum import Enum


class ExplorerError(Exception):
    """Base class for recoverable viewer errors. None are fatal to the session."""


class InvalidBodySelection(ExplorerError, ValueError):
    """Body id not present in the catalog."""

    def __init__(self, body_id: object) -> None:
        super().__init__(f"Unknown body: {body_id!r}")
        self.body_id = body_id


class InvalidDateSelection(ExplorerError, ValueError):
    """Date value not among the enumerated Earth dates."""

    def __init__(self, date: str) -> None:
        super().__init__(f"Unknown date: {date!r}")
        self.date = date


class CoordinateErrorKind(str, Enum):
    NOT_A_NUMBER = "not_a_number"
    LATITUDE_OUT_OF_RANGE = "latitude_out_of_range"
    LONGITUDE_OUT_OF_RANGE = "longitude_out_of_range"


class InvalidCoordinateInput(ExplorerError, ValueError):
    """Fly-to coordinates failed validation. `kind` names the failed constraint."""

    def __init__(self, kind: CoordinateErrorKind, detail: str) -> None:
        super().__init__(detail)
        self.kind = kind


class FlyToUnavailable(ExplorerError):
    """Fly-to requested outside Earth + Satellite mode."""


class LayerLoadFailure(ExplorerError):
    """Tile source could not be resolved or reported a load error."""

    def __init__(self, detail: str, generation: int | None = None) -> None:
        super().__init__(detail)
        self.generation = generation
