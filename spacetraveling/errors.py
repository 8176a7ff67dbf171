class CMSError(Exception):
    """Base class for failures while turning CMS content into page data."""


class IntegrityError(CMSError):
    """A CMS document is missing a field the mappers require."""

    def __init__(self, field: str, doc_id: str | None = None):
        self.field = field
        self.doc_id = doc_id
        where = f" in document {doc_id}" if doc_id else ""
        super().__init__(f"Missing or malformed field '{field}'{where}")


class FetchError(CMSError):
    """The CMS could not be reached or answered with something unusable."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(CMSError):
    """The requested document does not exist in the CMS."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Document not found: {identifier}")
