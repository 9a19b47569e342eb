from typing import Literal, Optional

from pydantic import BaseModel, Field


OccupationKey = Literal["Cleaner", "Doctor", "Author", "Farmer", "Mechanic", "Florist", "Other"]
RatingClass = Literal["Light Manual", "Professional", "White Collar", "Heavy Manual"]
FormField = Literal["name", "age_next_birthday", "dob_month_year", "occupation", "sum_insured"]
FormStatus = Literal["idle", "invalid", "computed"]

MAX_FIELD_LENGTH = 200


class PremiumFormInput(BaseModel):
    name: str = Field("", max_length=MAX_FIELD_LENGTH)
    age_next_birthday: str = Field("", max_length=MAX_FIELD_LENGTH)
    dob_month_year: str = Field("", max_length=MAX_FIELD_LENGTH, description="Date of birth as mm/YYYY")
    occupation: OccupationKey | Literal[""] = ""
    sum_insured: str = Field("", max_length=MAX_FIELD_LENGTH)


class FormFieldUpdate(BaseModel):
    field: FormField
    value: str = Field("", max_length=MAX_FIELD_LENGTH)


class OccupationOption(BaseModel):
    key: OccupationKey
    label: str
    rating_class: RatingClass
    display_label: str


class FormFieldDescriptor(BaseModel):
    field: FormField
    label: str
    input_type: Literal["text", "number", "select"]
    placeholder: str


class ValidationResponse(BaseModel):
    valid: bool
    errors: dict[str, str]


class PremiumFormSnapshot(BaseModel):
    form: PremiumFormInput
    errors: dict[str, str]
    status: FormStatus
    occupation_rating: Optional[RatingClass] = None
    monthly_premium: Optional[float] = None
    monthly_premium_display: Optional[str] = None
    disclaimer: Optional[str] = None


class PremiumFormSession(BaseModel):
    form_id: str
    snapshot: PremiumFormSnapshot
