from rapidfuzz.distance import Levenshtein

def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance. Case-sensitive, normalize before calling."""
    return Levenshtein.distance(a, b)

def similarity_ratio(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - edit_distance(a, b) / longest
