from __future__ import annotations

import math
import re

from app.models.schemas import (
    FormFieldDescriptor,
    OccupationOption,
    PremiumFormInput,
    PremiumFormSnapshot,
    ValidationResponse,
)
from app.services.premium_tables import (
    AGE_BANDS,
    DEFAULT_OCCUPATION_FACTOR,
    MAX_AGE,
    MIN_AGE,
    OCCUPATION_CATALOG,
    OCCUPATIONS,
    OLDEST_AGE_FACTOR,
    PREMIUM_DISCLAIMER,
    RATING_FACTORS,
)

MONTH_YEAR_REGEX = re.compile(r"(0[1-9]|1[0-2])/(19[0-9]{2}|20[0-9]{2})")

ERROR_MESSAGES: dict[str, str] = {
    "name": "Name is required",
    "age_next_birthday": f"Enter a valid age ({MIN_AGE}–{MAX_AGE})",
    "dob_month_year": "Enter DOB as mm/YYYY (e.g., 07/1990)",
    "occupation": "Select an occupation",
    "sum_insured": "Enter a positive Sum Insured",
}

FORM_FIELDS: tuple[FormFieldDescriptor, ...] = (
    FormFieldDescriptor(field="name", label="Name", input_type="text", placeholder="Full Name"),
    FormFieldDescriptor(
        field="age_next_birthday", label="Age Next Birthday", input_type="number", placeholder="e.g., 35"
    ),
    FormFieldDescriptor(
        field="dob_month_year", label="Date of Birth (mm/YYYY)", input_type="text", placeholder="mm/YYYY"
    ),
    FormFieldDescriptor(
        field="occupation", label="Usual Occupation", input_type="select", placeholder="-- Select --"
    ),
    FormFieldDescriptor(
        field="sum_insured", label="Death – Sum Insured", input_type="text", placeholder="e.g., 500000"
    ),
)


def parse_number(value: str) -> float | None:
    """Parse a numeric form value, ignoring thousands separators.

    Returns None for blank, non-numeric or non-finite input.
    """
    text = str(value or "").replace(",", "").strip()
    if not text or "_" in text or not text.isascii():
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def is_valid_month_year(value: str) -> bool:
    return MONTH_YEAR_REGEX.fullmatch(value or "") is not None


def validate_form(form: PremiumFormInput) -> dict[str, str]:
    errors: dict[str, str] = {}

    if not form.name.strip():
        errors["name"] = ERROR_MESSAGES["name"]

    age = parse_number(form.age_next_birthday)
    if age is None or not age.is_integer() or age < MIN_AGE or age > MAX_AGE:
        errors["age_next_birthday"] = ERROR_MESSAGES["age_next_birthday"]

    if not is_valid_month_year(form.dob_month_year):
        errors["dob_month_year"] = ERROR_MESSAGES["dob_month_year"]

    if not form.occupation:
        errors["occupation"] = ERROR_MESSAGES["occupation"]

    sum_insured = parse_number(form.sum_insured)
    if sum_insured is None or sum_insured <= 0:
        errors["sum_insured"] = ERROR_MESSAGES["sum_insured"]

    return errors


def check_form(form: PremiumFormInput) -> ValidationResponse:
    errors = validate_form(form)
    return ValidationResponse(valid=not errors, errors=errors)


def occupation_rating(occupation_key: str) -> str | None:
    found = OCCUPATION_CATALOG.get(occupation_key)
    return found.rating_class if found else None


def age_factor(age: float) -> float:
    for upper_bound, factor in AGE_BANDS:
        if age <= upper_bound:
            return factor
    return OLDEST_AGE_FACTOR


def occupation_factor(rating_class: str) -> float:
    return RATING_FACTORS.get(rating_class, DEFAULT_OCCUPATION_FACTOR)


def calculate_monthly_premium(sum_insured: float, age_next_birthday: float, rating_class: str) -> float:
    """Per-mille annual rate on the sum insured, scaled by occupation and age loadings."""
    premium = sum_insured * occupation_factor(rating_class) * age_factor(age_next_birthday) / 1000 * 12
    return premium if math.isfinite(premium) else 0.0


def format_premium(premium: float) -> str:
    if not math.isfinite(premium):
        premium = 0.0
    return f"{premium:,.2f}"


def build_snapshot(form: PremiumFormInput, errors: dict[str, str]) -> PremiumFormSnapshot:
    """Derive status and premium from a form and its current validation errors."""
    rating = occupation_rating(form.occupation)
    if not form.occupation:
        return PremiumFormSnapshot(form=form, errors=errors, status="idle")
    if errors:
        return PremiumFormSnapshot(form=form, errors=errors, status="invalid", occupation_rating=rating)

    # Validation guarantees both numbers parse.
    sum_insured = parse_number(form.sum_insured)
    age = parse_number(form.age_next_birthday)
    premium = round(calculate_monthly_premium(sum_insured, age, rating or ""), 2)
    return PremiumFormSnapshot(
        form=form,
        errors=errors,
        status="computed",
        occupation_rating=rating,
        monthly_premium=premium,
        monthly_premium_display=format_premium(premium),
        disclaimer=PREMIUM_DISCLAIMER,
    )


def quote_premium(form: PremiumFormInput) -> PremiumFormSnapshot:
    return build_snapshot(form, validate_form(form))


def occupation_options() -> list[OccupationOption]:
    return [
        OccupationOption(
            key=o.key,
            label=o.label,
            rating_class=o.rating_class,
            display_label=o.display_label,
        )
        for o in OCCUPATIONS
    ]


def form_fields() -> list[FormFieldDescriptor]:
    return list(FORM_FIELDS)
