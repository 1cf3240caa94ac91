"""Field-level validation results shared by the entity validators."""

from dataclasses import dataclass

from core.exceptions import FieldValidationError


@dataclass(frozen=True)
class FieldError:
    """One field that failed validation and why."""

    field: str
    reason: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "reason": self.reason}


def raise_for_errors(errors: list[FieldError]) -> None:
    """Raise a FieldValidationError carrying every error, if there are any."""
    if not errors:
        return
    first = errors[0]
    raise FieldValidationError(
        first.field,
        first.reason,
        errors=[error.as_dict() for error in errors],
    )
