# strings.py


def capitalize(text: str) -> str:
    """Upper-case the first character and leave the rest untouched.

    Unlike ``str.capitalize`` this does not lower-case the tail, so
    ``capitalize("mATLANG")`` is ``"MATLANG"``.
    """
    return text[:1].upper() + text[1:]
