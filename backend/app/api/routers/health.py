from fastapi import APIRouter

from app.services.premium_form import premium_form_registry

router = APIRouter()


@router.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok", "service": "premium-form-api"}


@router.get("/status")
def form_status() -> dict[str, int]:
    return {
        "open_forms": len(premium_form_registry),
        "max_open_forms": premium_form_registry.max_open_forms,
    }
