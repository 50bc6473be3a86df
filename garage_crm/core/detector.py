"""
Duplicate and data quality detection over a snapshot of clients and claims.

Each pass is a plain function of its input records. ``detect`` runs them
one by one and keeps going when a pass fails, so a single broken section
leaves the rest of the report intact. Nothing found here is merged or
written back.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence
from garage_crm.config import Settings
from garage_crm.core.matcher import FioMatcher
from garage_crm.core.normalizer import (
    normalize_phone, phone_key, normalize_plate, plate_to_cyrillic
)
from garage_crm.core.records import (
    Client, Claim, PhoneDuplicateGroup, FioDuplicateGroup,
    CarNumberClaim, CarNumberDuplicateGroup, ValidationIssue, QualityReport
)
from garage_crm.core.validation import (
    is_valid_phone, is_valid_plate, is_valid_vin, phone_error, plate_error, vin_error
)

logger = logging.getLogger(__name__)

def find_phone_duplicates(clients: Sequence[Client], min_digits: int = 10) -> List[PhoneDuplicateGroup]:
    """Group clients that share a phone number (short numbers are ignored)."""
    phone_map: Dict[str, List[Client]] = {}
    for client in clients:
        for phone in client.phones:
            if len(normalize_phone(phone)) < min_digits:
                continue
            phone_map.setdefault(phone_key(phone), []).append(client)

    groups = []
    for phone, owners in phone_map.items():
        # A client may list the same number twice in different formats
        unique = list({client.id: client for client in owners}.values())
        if len(unique) > 1:
            groups.append(PhoneDuplicateGroup(phone=phone, clients=tuple(unique)))
    return groups

def find_fio_duplicates(clients: Sequence[Client], max_distance: int = 3) -> List[FioDuplicateGroup]:
    return FioMatcher(max_distance=max_distance).group(list(clients))

def find_car_number_conflicts(claims: Sequence[Claim], lookalike_aware: bool = False) -> List[CarNumberDuplicateGroup]:
    """Flag plates that appear on claims of more than one client name."""
    plate_map: Dict[str, List[CarNumberClaim]] = {}
    for claim in claims:
        plate = normalize_plate(claim.car_number)
        if not plate:
            continue
        if lookalike_aware:
            plate = plate_to_cyrillic(plate)
        plate_map.setdefault(plate, []).append(CarNumberClaim(claim=claim, client_fio=claim.client_fio))

    groups = []
    for plate, entries in plate_map.items():
        names = {entry.client_fio.lower().strip() for entry in entries}
        if len(names) > 1:
            groups.append(CarNumberDuplicateGroup(car_number=plate, claims=tuple(entries)))
    return groups

def find_validation_issues(clients: Sequence[Client], claims: Sequence[Claim]) -> List[ValidationIssue]:
    issues = []

    for client in clients:
        for phone in client.phones:
            if not is_valid_phone(phone):
                issues.append(ValidationIssue('phone', 'client', client.id, phone, phone_error(phone)))

    for claim in claims:
        phones = [p for p in (claim.phone, *claim.phones) if p]
        for phone in dict.fromkeys(phones):
            if not is_valid_phone(phone):
                issues.append(ValidationIssue('phone', 'claim', claim.id, phone, phone_error(phone)))

        if claim.car_number and not is_valid_plate(claim.car_number):
            issues.append(ValidationIssue('car_number', 'claim', claim.id, claim.car_number, plate_error(claim.car_number)))

        if claim.vin and not is_valid_vin(claim.vin):
            issues.append(ValidationIssue('vin', 'claim', claim.id, claim.vin, vin_error(claim.vin)))

    return issues

def _run_pass(name: str, func: Callable[[], list], errors: List[str]) -> list:
    try:
        result = func()
    except Exception:
        logger.exception(f"Quality pass '{name}' failed, leaving it out of the report")
        errors.append(name)
        return []
    logger.info(f"Quality pass '{name}' found {len(result)} item(s)")
    return result

def detect(
    clients: Sequence[Client],
    claims: Sequence[Claim],
    settings: Optional[Settings] = None,
    errors: Optional[List[str]] = None
) -> QualityReport:
    """Run all four passes and assemble the report.

    ``errors`` may carry sections that already failed upstream (e.g. a
    table that could not be loaded); failing passes are appended to it.
    """
    settings = settings or Settings()
    errors = list(errors or [])

    phone_duplicates = _run_pass(
        'phone_duplicates',
        lambda: find_phone_duplicates(clients, settings.phone_min_digits),
        errors
    )
    fio_duplicates = _run_pass(
        'fio_duplicates',
        lambda: find_fio_duplicates(clients, settings.fio_max_distance),
        errors
    )
    car_number_duplicates = _run_pass(
        'car_number_duplicates',
        lambda: find_car_number_conflicts(claims, settings.plate_lookalike_aware),
        errors
    )
    validation_issues = _run_pass(
        'validation_issues',
        lambda: find_validation_issues(clients, claims),
        errors
    )

    return QualityReport(
        phone_duplicates=tuple(phone_duplicates),
        fio_duplicates=tuple(fio_duplicates),
        car_number_duplicates=tuple(car_number_duplicates),
        validation_issues=tuple(validation_issues),
        total_clients=len(clients),
        total_claims=len(claims),
        errors=tuple(errors)
    )
