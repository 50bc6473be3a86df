from .exceptions import QualityError, DataAccessError, NotFoundError, MergeError
from .records import (
    Client, Claim, PhoneDuplicateGroup, FioDuplicateGroup, CarNumberDuplicateGroup,
    ValidationIssue, QualityReport, MergeResult
)
from .validation import is_valid_phone, is_valid_plate, is_valid_vin
from .quality_manager import QualityManager

__all__ = [
    'QualityError',
    'DataAccessError',
    'NotFoundError',
    'MergeError',
    'Client',
    'Claim',
    'PhoneDuplicateGroup',
    'FioDuplicateGroup',
    'CarNumberDuplicateGroup',
    'ValidationIssue',
    'QualityReport',
    'MergeResult',
    'is_valid_phone',
    'is_valid_plate',
    'is_valid_vin',
    'QualityManager'
]
