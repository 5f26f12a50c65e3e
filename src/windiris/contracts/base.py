"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from windiris.contracts.failure import ContractViolation


def require(condition: bool, message: str, exc: type = ContractViolation) -> None:
    """Enforce a decoding contract.

    Parameters
    ----------
    condition : bool
        The invariant that must be true.
    message : str
        Error message explaining the violation.
    exc : type, optional
        Exception class to raise (default: ContractViolation).

    Raises
    ------
    ContractViolation
        If condition is False (or ``exc`` when given).

    Examples
    --------
    >>> require(len(lines) > 1, "Header contract: no data lines", StructuralParseError)
    """
    if not condition:
        raise exc(message)
