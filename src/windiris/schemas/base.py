"""Base Pydantic model with strict defaults for windiris configs.

All windiris config schemas inherit from this base to ensure consistent
validation behavior across parameter, user, CLI, internal and catalog configs.
"""

from pydantic import BaseModel, ConfigDict


class WindIrisBaseModel(BaseModel):
    """Base model for all windiris configuration schemas.

    Enforces strict validation:
    - No extra fields allowed
    - Validates assignments after initialization
    - Strips surrounding whitespace from strings
    """

    model_config = ConfigDict(
        extra='forbid',           # Reject unknown fields
        validate_assignment=True, # Validate on field mutation
        use_enum_values=True,     # Convert enums to values
        str_strip_whitespace=True,# Strip whitespace from strings
    )
