class PastaCoreError(Exception):
    """Base class for domain exceptions."""


class StorageIOError(PastaCoreError):
    """A filesystem operation on the store failed."""


class DuplicateIdentifierError(PastaCoreError):
    pass


class CorruptRecordError(PastaCoreError):
    pass


class InvalidIdentifierError(PastaCoreError, ValueError):
    pass


class PastaNotFoundError(PastaCoreError):
    pass
