from typing import Optional

class QualityError(Exception):
    """Base class for data quality errors"""

class DataAccessError(QualityError):
    """A data store call failed"""

class NotFoundError(QualityError):
    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")

class MergeError(QualityError):
    """Merge request was rejected or failed part way.

    ``step`` names the merge step that failed, or is None when the request
    itself was invalid and nothing was written.
    """
    def __init__(self, message: str, step: Optional[str] = None):
        self.step = step
        super().__init__(message)
