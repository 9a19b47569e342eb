import math

import pytest
from pydantic import ValidationError

from app.models.schemas import MAX_FIELD_LENGTH, PremiumFormInput
from app.services.premium_service import (
    age_factor,
    calculate_monthly_premium,
    check_form,
    format_premium,
    occupation_factor,
    occupation_options,
    occupation_rating,
    parse_number,
    quote_premium,
    validate_form,
)
from app.services.premium_tables import OCCUPATION_CATALOG, RATING_FACTORS


def _valid_form(**overrides: str) -> PremiumFormInput:
    values = {
        "name": "Test User",
        "age_next_birthday": "35",
        "dob_month_year": "07/1990",
        "occupation": "Doctor",
        "sum_insured": "500000",
    }
    values.update(overrides)
    return PremiumFormInput(**values)


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (21, 0.80),
        (30, 0.80),
        (31, 1.00),
        (40, 1.00),
        (41, 1.30),
        (50, 1.30),
        (51, 1.70),
        (60, 1.70),
        (61, 2.20),
        (120, 2.20),
    ],
)
def test_age_factor_bands(age: int, expected: float) -> None:
    assert age_factor(age) == expected


def test_occupation_lookup_and_factor_defaults() -> None:
    assert occupation_rating("Doctor") == "Professional"
    assert occupation_rating("Cleaner") == "Light Manual"
    assert occupation_rating("") is None
    assert occupation_rating("Astronaut") is None
    assert occupation_factor("Heavy Manual") == 31.75
    assert occupation_factor("Unknown Class") == 1.0


def test_calculate_monthly_premium_examples() -> None:
    assert calculate_monthly_premium(500000, 35, "Professional") == pytest.approx(9000.00)
    assert calculate_monthly_premium(500000, 35, "Light Manual") == pytest.approx(69000.00)
    assert calculate_monthly_premium(100000, 25, "White Collar") == pytest.approx(100000 * 2.25 * 0.8 / 1000 * 12)


def test_calculate_monthly_premium_collapses_non_finite_to_zero() -> None:
    assert calculate_monthly_premium(1e308, 65, "Heavy Manual") == 0.0
    assert calculate_monthly_premium(math.nan, 35, "Professional") == 0.0


def test_parse_number_handles_separators_and_garbage() -> None:
    assert parse_number("500,000") == 500000
    assert parse_number(" 35 ") == 35
    assert parse_number("") is None
    assert parse_number("abc") is None
    assert parse_number("inf") is None
    assert parse_number("nan") is None
    assert parse_number("1_000") is None


@pytest.mark.parametrize("text", ["٣٥", "３５", "５００００٠"])
def test_parse_number_rejects_non_ascii_digits(text: str) -> None:
    assert parse_number(text) is None


def test_validate_form_accepts_valid_input() -> None:
    assert validate_form(_valid_form()) == {}
    assert validate_form(_valid_form(age_next_birthday="35.0", sum_insured="1,250,000")) == {}


def test_validate_form_reports_each_field() -> None:
    errors = validate_form(PremiumFormInput())
    assert errors == {
        "name": "Name is required",
        "age_next_birthday": "Enter a valid age (21–120)",
        "dob_month_year": "Enter DOB as mm/YYYY (e.g., 07/1990)",
        "occupation": "Select an occupation",
        "sum_insured": "Enter a positive Sum Insured",
    }


@pytest.mark.parametrize("age", ["18", "20", "121", "35.5", "thirty", "", "٣٥", "３５"])
def test_validate_form_rejects_bad_age(age: str) -> None:
    errors = validate_form(_valid_form(age_next_birthday=age))
    assert set(errors) == {"age_next_birthday"}


@pytest.mark.parametrize("dob", ["7/1990", "13/1990", "00/1990", "07/1899", "07/2100", "07-1990", "07/1990\n"])
def test_validate_form_rejects_bad_month_year(dob: str) -> None:
    errors = validate_form(_valid_form(dob_month_year=dob))
    assert set(errors) == {"dob_month_year"}


@pytest.mark.parametrize("amount", ["0", "-5", "", "lots", "Infinity"])
def test_validate_form_rejects_bad_sum_insured(amount: str) -> None:
    errors = validate_form(_valid_form(sum_insured=amount))
    assert set(errors) == {"sum_insured"}


def test_whitespace_name_is_required() -> None:
    assert validate_form(_valid_form(name="   ")) == {"name": "Name is required"}


def test_check_form_is_idempotent() -> None:
    form = _valid_form(age_next_birthday="18")
    first = check_form(form)
    second = check_form(form)
    assert first == second
    assert first.valid is False
    assert quote_premium(form) == quote_premium(form)


def test_quote_premium_computed() -> None:
    snapshot = quote_premium(_valid_form())
    assert snapshot.status == "computed"
    assert snapshot.monthly_premium == 9000.00
    assert snapshot.monthly_premium_display == "9,000.00"
    assert snapshot.occupation_rating == "Professional"
    assert snapshot.disclaimer


def test_quote_premium_suppressed_when_age_too_low() -> None:
    snapshot = quote_premium(_valid_form(age_next_birthday="18", dob_month_year="07/2007"))
    assert snapshot.status == "invalid"
    assert snapshot.monthly_premium is None
    assert snapshot.monthly_premium_display is None
    assert snapshot.errors["age_next_birthday"].startswith("Enter a valid age")


def test_quote_premium_idle_without_occupation() -> None:
    snapshot = quote_premium(_valid_form(occupation=""))
    assert snapshot.status == "idle"
    assert snapshot.monthly_premium is None
    assert snapshot.occupation_rating is None


def test_format_premium() -> None:
    assert format_premium(69000) == "69,000.00"
    assert format_premium(1234.5) == "1,234.50"
    assert format_premium(math.inf) == "0.00"


def test_occupation_options_match_catalog() -> None:
    options = occupation_options()
    assert [o.key for o in options] == list(OCCUPATION_CATALOG)
    doctor = next(o for o in options if o.key == "Doctor")
    assert doctor.display_label == "Doctor — Professional"
    assert all(o.rating_class in RATING_FACTORS for o in options)


def test_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        RATING_FACTORS["Professional"] = 0.1  # type: ignore[index]


def test_quote_premium_rejects_non_ascii_numbers() -> None:
    snapshot = quote_premium(_valid_form(age_next_birthday="٣٥", sum_insured="５００００٠"))
    assert snapshot.status == "invalid"
    assert snapshot.monthly_premium is None
    assert set(snapshot.errors) == {"age_next_birthday", "sum_insured"}


def test_form_input_fields_are_length_limited() -> None:
    with pytest.raises(ValidationError):
        PremiumFormInput(name="x" * (MAX_FIELD_LENGTH + 1))
    assert PremiumFormInput(name="x" * MAX_FIELD_LENGTH).name == "x" * MAX_FIELD_LENGTH
