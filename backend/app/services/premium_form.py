from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from uuid import uuid4

from app.core.config import settings
from app.models.schemas import PremiumFormInput, PremiumFormSession, PremiumFormSnapshot
from app.services.premium_service import build_snapshot, validate_form
from app.services.premium_tables import OCCUPATION_CATALOG

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = tuple(PremiumFormInput.model_fields)


class UnknownFormError(LookupError):
    pass


class UnknownOccupationError(ValueError):
    pass


class PremiumFormEngine:
    """Form state plus the premium derived from it.

    Every edit goes through update_field, which re-validates the whole form and
    recomputes the premium. Clearing the occupation always drops the premium.
    """

    def __init__(self) -> None:
        self._form = PremiumFormInput()
        self._errors: dict[str, str] = {}
        self._snapshot = build_snapshot(self._form, self._errors)

    @property
    def form(self) -> PremiumFormInput:
        return self._form.model_copy()

    @property
    def snapshot(self) -> PremiumFormSnapshot:
        return self._snapshot.model_copy(deep=True)

    @property
    def status(self) -> str:
        return self._snapshot.status

    @property
    def premium(self) -> float | None:
        return self._snapshot.monthly_premium

    @property
    def errors(self) -> dict[str, str]:
        return dict(self._errors)

    def update_field(self, field: str, value: str) -> PremiumFormSnapshot:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown form field: {field}")
        if field == "occupation" and value and value not in OCCUPATION_CATALOG:
            raise UnknownOccupationError(f"Unknown occupation: {value}")

        self._form = self._form.model_copy(update={field: value})
        self._recalculate()
        logger.debug("Field %s updated; status=%s", field, self._snapshot.status)
        return self.snapshot

    def submit(self, form: PremiumFormInput) -> PremiumFormSnapshot:
        self._form = form.model_copy()
        self._recalculate()
        return self.snapshot

    def reset(self) -> PremiumFormSnapshot:
        self._form = PremiumFormInput()
        self._errors = {}
        self._snapshot = build_snapshot(self._form, self._errors)
        return self.snapshot

    def _recalculate(self) -> None:
        self._errors = validate_form(self._form)
        self._snapshot = build_snapshot(self._form, self._errors)


class PremiumFormRegistry:
    """Open forms kept in memory; closing a form discards its state."""

    def __init__(self, max_open_forms: int | None = None) -> None:
        self.max_open_forms = max(1, settings.max_open_forms if max_open_forms is None else max_open_forms)
        self._forms: OrderedDict[str, PremiumFormEngine] = OrderedDict()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._forms)

    def open(self) -> PremiumFormSession:
        form_id = uuid4().hex
        engine = PremiumFormEngine()
        with self._lock:
            while len(self._forms) >= self.max_open_forms:
                evicted_id, _ = self._forms.popitem(last=False)
                logger.info("Evicted premium form %s (limit %d)", evicted_id, self.max_open_forms)
            self._forms[form_id] = engine
        logger.info("Opened premium form %s", form_id)
        return PremiumFormSession(form_id=form_id, snapshot=engine.snapshot)

    def get(self, form_id: str) -> PremiumFormEngine:
        with self._lock:
            engine = self._forms.get(form_id)
        if engine is None:
            raise UnknownFormError(f"Premium form {form_id} not found.")
        return engine

    def update_field(self, form_id: str, field: str, value: str) -> PremiumFormSnapshot:
        with self._lock:
            return self.get(form_id).update_field(field, value)

    def submit(self, form_id: str, form: PremiumFormInput) -> PremiumFormSnapshot:
        with self._lock:
            return self.get(form_id).submit(form)

    def reset(self, form_id: str) -> PremiumFormSnapshot:
        with self._lock:
            return self.get(form_id).reset()

    def close(self, form_id: str) -> None:
        with self._lock:
            if self._forms.pop(form_id, None) is None:
                raise UnknownFormError(f"Premium form {form_id} not found.")
        logger.info("Closed premium form %s", form_id)


premium_form_registry = PremiumFormRegistry()
