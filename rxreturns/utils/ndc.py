"""NDC normalization and matching."""


def normalize_ndc(value: object) -> str:
    """Strip dashes and surrounding whitespace so 42385-0978-01 and 42385097801 compare equal."""
    if value is None:
        return ""
    return str(value).replace("-", "").strip()


def ndc_prefix_match(term: str, ndc: str) -> bool:
    """Search-mode match: either normalized value is a prefix of the other."""
    t = normalize_ndc(term)
    n = normalize_ndc(ndc)
    if not t or not n:
        return False
    return n.startswith(t) or t.startswith(n)
