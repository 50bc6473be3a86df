import re
from typing import List, Optional

_NON_DIGITS = re.compile(r'\D')
_WHITESPACE = re.compile(r'\s+')

# Latin letters that share a glyph with a Cyrillic plate letter
_LAT_TO_CYR = str.maketrans('ABEKMHOPCTYX', 'АВЕКМНОРСТУХ')
_CYR_TO_LAT = str.maketrans('АВЕКМНОРСТУХ', 'ABEKMHOPCTYX')

def normalize_phone(phone: Optional[str]) -> str:
    """Remove all non-digit characters from phone number."""
    return _NON_DIGITS.sub('', phone or '')

def phone_key(phone: Optional[str]) -> str:
    """Comparison key: 8XXXXXXXXXX and bare 10-digit numbers fold into 7XXXXXXXXXX."""
    digits = normalize_phone(phone)
    if len(digits) == 11 and digits.startswith('8'):
        return '7' + digits[1:]
    if len(digits) == 10:
        return '7' + digits
    return digits

def format_phone(phone: Optional[str]) -> str:
    """Render as +7 (XXX) XXX-XX-XX, or return the input unchanged if it isn't a Russian number."""
    digits = normalize_phone(phone)
    if len(digits) == 11 and digits[0] in '78':
        digits = digits[1:]
    elif len(digits) != 10:
        return phone or ''
    return f"+7 ({digits[:3]}) {digits[3:6]}-{digits[6:8]}-{digits[8:]}"

def normalize_fio(fio: Optional[str]) -> str:
    return _WHITESPACE.sub(' ', (fio or '').lower().strip())

def normalize_plate(car_number: Optional[str]) -> str:
    return _WHITESPACE.sub('', (car_number or '').upper())

def plate_to_cyrillic(car_number: Optional[str]) -> str:
    return (car_number or '').upper().translate(_LAT_TO_CYR)

def plate_search_variants(car_number: Optional[str]) -> List[str]:
    """Spellings of a plate as typed, in Cyrillic and in Latin look-alikes."""
    upper = (car_number or '').upper()
    variants = [upper, upper.translate(_LAT_TO_CYR), upper.translate(_CYR_TO_LAT)]
    return list(dict.fromkeys(variants))
