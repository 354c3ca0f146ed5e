from collections.abc import Mapping
from typing import Callable

from pydantic import BaseModel, ValidationError

from election_tally.domain.models import ValidationResult, ValidatorRules


def _read_rules(rules):
    if isinstance(rules, ValidatorRules):
        return rules
    if not isinstance(rules, Mapping):
        return None
    # None means "use the default", like an omitted option
    options = {key: value for key, value in rules.items() if value is not None}
    try:
        return ValidatorRules.model_validate(options)
    except ValidationError:
        return None


def _age_as_number(value):
    """Numeric reading of an age, or None when it has none.

    ``None`` reads as 0, booleans as 0/1 and numeric strings as floats, so
    ``{"age": None}`` or ``{"age": "12"}`` still face the minimum-age check.
    """
    if value is None:
        return 0
    if isinstance(value, (int, float)):
        return int(value) if isinstance(value, bool) else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        try:
            return float(text)
        except ValueError:
            return None
    return None


def create_vote_validator(rules) -> Callable[[object], ValidationResult]:
    """Build an eligibility check from ``rules``.

    Recognised options are ``min_age`` (``minAge``) and ``required_fields``
    (``requiredFields``). Rules that cannot be read produce a validator that
    rejects every voter without a reason.
    """
    parsed = _read_rules(rules)
    if parsed is None:
        return lambda voter: ValidationResult(valid=False)

    min_age = parsed.min_age
    required_fields = tuple(parsed.required_fields)

    def validate(voter) -> ValidationResult:
        if isinstance(voter, BaseModel):
            voter = voter.model_dump()
        if not isinstance(voter, Mapping):
            return ValidationResult(valid=False, reason="Invalid voter object")

        for field in required_fields:
            if field not in voter:
                return ValidationResult(valid=False, reason=f"Missing field: {field}")

        # an absent age is only rejected when "age" is a required field
        age = _age_as_number(voter["age"]) if "age" in voter else None
        if age is not None and age < min_age:
            return ValidationResult(
                valid=False, reason=f"Voter below minimum age {min_age}"
            )

        return ValidationResult(valid=True, reason="")

    return validate
