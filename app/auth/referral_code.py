"""
School refer code derivation.
Deterministic: same school attributes always give the same code, so uniqueness is
enforced at registration, not here.
Format: first 4 of affiliation code + first 4 of school name (whitespace removed),
both uppercased, followed by the pin code verbatim.
"""


def derive_refer_code(affiliation_code: str, school_name: str, pin_code: str) -> str:
    """
    Derive a school's refer code.

    Rules:
    - First 4 characters of affiliation_code, uppercase.
    - First 4 characters of school_name after removing all whitespace, uppercase.
    - pin_code appended unchanged (no case change, no truncation).
    - Shorter inputs contribute what they have; nothing is padded.

    Examples:
        CBSE012345, DAV Public School, 800001 -> CBSEDAVP800001
        ICS,        St Xaviers,        110001 -> ICSSTXA110001
    """
    affiliation_part = affiliation_code[:4].upper()
    name_part = "".join(school_name.split())[:4].upper()
    return affiliation_part + name_part + pin_code
