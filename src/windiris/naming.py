"""Resource-name normalization.

Maps arbitrary header text (e.g. ``"HWS hub (m/s)"``) onto a token matching
``^[A-Za-z_][A-Za-z0-9_]*$`` that can be joined into resource identifiers.
"""

import re

__all__ = ['InvalidIdentifier', 'normalize', 'is_valid_identifier', 'join_identifier']

_VALID = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INVALID_CHARS = re.compile(r"[^A-Za-z0-9_]")
_INVALID_LEADING = re.compile(r"^[^A-Za-z_]")
_UNDERSCORE_RUNS = re.compile(r"_{2,}")


class InvalidIdentifier(ValueError):
    """Raised when a text cannot be turned into a valid identifier."""
    pass


def is_valid_identifier(value: str) -> bool:
    return bool(_VALID.match(value))


def normalize(raw: str) -> str:
    """Normalize header text into a safe resource-name token.

    Steps: replace characters outside ``[A-Za-z0-9_]`` with ``_``, replace a
    disallowed leading character with ``_``, collapse ``_`` runs, trim
    ``_`` on both ends.

    Parameters
    ----------
    raw : str
        Header field text.

    Returns
    -------
    str
        Normalized token.

    Raises
    ------
    InvalidIdentifier
        If the result is empty or does not start with a letter
        (``"10 m"`` ends up as ``"0_m"``, ``"---"`` ends up empty).

    Examples
    --------
    >>> normalize("HWS hub")
    'HWS_hub'
    >>> normalize("Wind Speed Dispersion (m/s)")
    'Wind_Speed_Dispersion_m_s'
    """
    value = _INVALID_CHARS.sub("_", raw)
    value = _INVALID_LEADING.sub("_", value)
    value = _UNDERSCORE_RUNS.sub("_", value).strip("_")

    if not is_valid_identifier(value):
        raise InvalidIdentifier(f"Cannot normalize {raw!r} into a valid identifier (got {value!r})")

    return value


def join_identifier(*parts) -> str:
    """Join identifier components with ``_`` (e.g. instrument, beam, column)."""
    return "_".join(str(p) for p in parts)
