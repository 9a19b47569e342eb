from fastapi import APIRouter, HTTPException, Response

from app.models.schemas import (
    FormFieldDescriptor,
    FormFieldUpdate,
    OccupationOption,
    PremiumFormInput,
    PremiumFormSession,
    PremiumFormSnapshot,
    ValidationResponse,
)
from app.services.premium_form import UnknownFormError, UnknownOccupationError, premium_form_registry
from app.services.premium_service import check_form, form_fields, occupation_options, quote_premium

router = APIRouter()


@router.get("/occupations", response_model=list[OccupationOption])
def list_occupations() -> list[OccupationOption]:
    return occupation_options()


@router.get("/fields", response_model=list[FormFieldDescriptor])
def list_form_fields() -> list[FormFieldDescriptor]:
    return form_fields()


@router.post("/validate", response_model=ValidationResponse)
def validate_premium_form(payload: PremiumFormInput) -> ValidationResponse:
    return check_form(payload)


@router.post("/quote", response_model=PremiumFormSnapshot)
def quote(payload: PremiumFormInput) -> PremiumFormSnapshot:
    return quote_premium(payload)


@router.post("/forms", response_model=PremiumFormSession, status_code=201)
def open_form() -> PremiumFormSession:
    return premium_form_registry.open()


@router.get("/forms/{form_id}", response_model=PremiumFormSnapshot)
def get_form(form_id: str) -> PremiumFormSnapshot:
    try:
        return premium_form_registry.get(form_id).snapshot
    except UnknownFormError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.patch("/forms/{form_id}", response_model=PremiumFormSnapshot)
def update_form_field(form_id: str, payload: FormFieldUpdate) -> PremiumFormSnapshot:
    try:
        return premium_form_registry.update_field(form_id, payload.field, payload.value)
    except UnknownFormError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except UnknownOccupationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.put("/forms/{form_id}", response_model=PremiumFormSnapshot)
def submit_form(form_id: str, payload: PremiumFormInput) -> PremiumFormSnapshot:
    try:
        return premium_form_registry.submit(form_id, payload)
    except UnknownFormError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/forms/{form_id}/reset", response_model=PremiumFormSnapshot)
def reset_form(form_id: str) -> PremiumFormSnapshot:
    try:
        return premium_form_registry.reset(form_id)
    except UnknownFormError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/forms/{form_id}", status_code=204)
def close_form(form_id: str) -> Response:
    try:
        premium_form_registry.close(form_id)
    except UnknownFormError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
