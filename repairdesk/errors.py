class RepairDeskError(Exception):
    """Base class for errors raised by the repair desk core."""


class RepairValidationError(RepairDeskError):
    """A command was rejected before any state changed."""


class RecordNotFoundError(RepairDeskError):
    def __init__(self, kind: str, key: str) -> None:
        super().__init__(f"{kind} '{key}' not found")
        self.kind = kind
        self.key = key


class ImportFailedError(RepairDeskError):
    """The uploaded file could not be read as a spreadsheet."""


class RegistrationError(RepairDeskError):
    pass
