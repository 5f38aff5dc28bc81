from pydantic import BaseModel, ConfigDict


class BaseDTO(BaseModel):
    """
    Base class for every engine model and DTO.

    Features:
        - from_attributes=True (build from plain objects)
        - str_strip_whitespace=True (strings are trimmed on input)
        - validate_assignment=True (field updates are re-validated)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        validate_assignment=True
    )
