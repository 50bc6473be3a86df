"""
Format checks for phone numbers, Russian car plates and VINs.

The ``is_valid_*`` predicates never raise; the ``*_error`` helpers return a
message for form and report output, or an empty string when the value is fine.
"""

import re
from typing import Optional
from garage_crm.core.normalizer import normalize_phone

_PHONE = re.compile(r'^[78]\d{10}$')
# One letter, three digits, two letters, 2-3 digit region; only letters that look Latin
_PLATE = re.compile(r'^[АВЕКМНОРСТУХ]\d{3}[АВЕКМНОРСТУХ]{2}\d{2,3}$')
_VIN = re.compile(r'^[A-HJ-NPR-Z0-9]{17}$')
_SPACES = re.compile(r'\s')

def is_valid_phone(phone: Optional[str]) -> bool:
    return bool(_PHONE.match(normalize_phone(phone)))

def is_valid_plate(car_number: Optional[str]) -> bool:
    return bool(_PLATE.match(_SPACES.sub('', (car_number or '').upper())))

def is_valid_vin(vin: Optional[str]) -> bool:
    if not vin:
        return True
    return bool(_VIN.match(_SPACES.sub('', vin.upper())))

def phone_error(phone: Optional[str]) -> str:
    if is_valid_phone(phone):
        return ''
    return f"Invalid phone format: {phone}"

def plate_error(car_number: Optional[str]) -> str:
    if is_valid_plate(car_number):
        return ''
    return f"Invalid car number format: {car_number}"

def vin_error(vin: Optional[str]) -> str:
    if is_valid_vin(vin):
        return ''
    cleaned = _SPACES.sub('', vin.upper())
    if len(cleaned) != 17:
        return f"VIN must be 17 characters: {vin}"
    if re.search(r'[IOQ]', cleaned):
        return f"VIN cannot contain I, O or Q: {vin}"
    return f"VIN may only contain Latin letters and digits: {vin}"
