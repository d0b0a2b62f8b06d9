"""Domain exceptions."""


class VersionControlError(Exception):
    """Base exception for the version control engine."""

    retryable = False


class NotFound(VersionControlError):
    """Requested resource was not found."""

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class DocumentNotFound(NotFound):
    """Document is not initialized for version control."""

    def __init__(self, document_id: str) -> None:
        super().__init__("Document", document_id)


class VersionNotFound(NotFound):
    """Version does not exist in the document."""

    def __init__(self, version_id: object) -> None:
        super().__init__("Version", str(version_id))


class BranchNotFound(NotFound):
    """Branch does not exist in the document."""

    def __init__(self, name: str) -> None:
        super().__init__("Branch", name)


class TagNotFound(NotFound):
    """Tag does not exist in the document."""

    def __init__(self, name: str) -> None:
        super().__init__("Tag", name)


class AlreadyExists(VersionControlError):
    """Resource with the same identity already exists."""

    pass


class DocumentAlreadyExists(AlreadyExists):
    """Document was already initialized."""

    pass


class BranchAlreadyExists(AlreadyExists):
    """Branch name is taken within the document."""

    pass


class TagAlreadyExists(AlreadyExists):
    """Tag name is taken within the document."""

    pass


class ValidationError(VersionControlError):
    """Validation failed for input data."""

    pass


class InvalidBranchName(ValidationError):
    """Branch name does not match the allowed pattern."""

    pass


class InvalidTagName(ValidationError):
    """Tag name does not match the allowed pattern."""

    pass


class PatchMismatch(ValidationError):
    """Edit script does not apply to the given content."""

    pass


class BranchProtected(VersionControlError):
    """Direct write to a protected branch without override."""

    pass


class NothingToMerge(VersionControlError):
    """Source head is already contained in the target branch."""

    pass


class MergeConflict(VersionControlError):
    """Overlapping edits need manual resolution."""

    def __init__(self, message: str, conflicts: list | None = None) -> None:
        super().__init__(message)
        self.conflicts = conflicts or []


class StorageUnavailable(VersionControlError):
    """Backing store timed out or is unreachable. Safe to retry."""

    retryable = True
