# services/registration_service.py
import uuid
import logging
import datetime
from typing import Optional, Dict, Any, List

from sqlalchemy.engine import Engine

from domain.errors import (
    ConstraintError, DuplicateCpfError, NotFoundError,
    PersistenceMismatchError, RegistrationClosedError, ValidationError,
)
from domain.models import Registration, RegistrationDraft, PAYMENT_METHODS, filter_predicate
from services import settings_service
from utils import table_client
from utils.format_utils import digits_only, format_cep, format_cpf, format_phone
from utils.validation_utils import first_draft_error

logger = logging.getLogger(__name__)

TABLE = "registrations"

MSG_DUPLICATE_CPF = "Este CPF já está cadastrado"
MSG_CLOSED = "As inscrições estão encerradas"
MSG_BAD_PAYMENT = "Forma de pagamento inválida"

# ─────────────────────────────────────────────────────────────
# Helpers
# ─────────────────────────────────────────────────────────────

def _now() -> datetime.datetime:
    return datetime.datetime.now(tz=datetime.timezone.utc)

def _blank_to_none(v: str) -> Optional[str]:
    v = (v or "").strip()
    return v or None

def _normalize(draft: RegistrationDraft) -> Dict[str, Any]:
    """Formatted column values for a validated draft."""
    return {
        "nome_completo": draft.nome_completo.strip(),
        "cpf": format_cpf(draft.cpf),
        "whats_participante": _blank_to_none(format_phone(draft.whats_participante)),
        "cep": format_cep(draft.cep),
        "endereco": draft.endereco.strip(),
        "numero": digits_only(draft.numero),
        "bairro": draft.bairro.strip(),
        "cidade": draft.cidade.strip(),
        "estado": draft.estado.strip(),
        "estado_civil": draft.estado_civil,
        "nome_contato": _blank_to_none(draft.nome_contato),
        "whatsapp_contato": _blank_to_none(format_phone(draft.whatsapp_contato)),
    }

def _check_draft(draft: RegistrationDraft) -> None:
    problem = first_draft_error(draft)
    if problem:
        raise ValidationError(problem)

def _is_cpf_conflict(err: ConstraintError) -> bool:
    """True when the store names the cpf column or its unique index."""
    return "cpf" in str(err).lower()

def _row_or_404(bind, registration_id: str) -> Dict[str, Any]:
    row = table_client.select_one(bind, TABLE, {"id": registration_id})
    if not row:
        raise NotFoundError(f"Cadastro {registration_id} não encontrado")
    return row

# ─────────────────────────────────────────────────────────────
# Sequence + CPF guard
# ─────────────────────────────────────────────────────────────

def next_sequence_number(bind) -> int:
    """max(sequence_number) + 1, or 1 on an empty table. Not isolated from concurrent inserts."""
    current = table_client.max_value(bind, TABLE, "sequence_number")
    return int(current) + 1 if current is not None else 1

def cpf_exists(bind, cpf: str, exclude_id: Optional[str] = None) -> bool:
    rows = table_client.select_rows(bind, TABLE, columns=["id"], filters={"cpf": format_cpf(cpf)})
    return any(r["id"] != exclude_id for r in rows)

# ─────────────────────────────────────────────────────────────
# Form
# ─────────────────────────────────────────────────────────────

def submit_registration(engine: Engine, draft: RegistrationDraft) -> Registration:
    _check_draft(draft)
    values = _normalize(draft)

    if settings_service.is_registration_closed(engine):
        raise RegistrationClosedError(MSG_CLOSED)

    if cpf_exists(engine, values["cpf"]):
        raise DuplicateCpfError(MSG_DUPLICATE_CPF)

    values.update({
        "id": str(uuid.uuid4()),
        "verified": False,
        "payment_method": None,
        "created_at": _now(),
    })
    try:
        with engine.begin() as conn:
            values["sequence_number"] = next_sequence_number(conn)
            row = table_client.insert_row(conn, TABLE, values)
    except ConstraintError as e:
        if _is_cpf_conflict(e):
            # unique(cpf) caught a concurrent submission the pre-check missed
            raise DuplicateCpfError(MSG_DUPLICATE_CPF) from e
        raise

    logger.info("Registration %s created (#%s)", row["id"], row["sequence_number"])
    return Registration.from_row(row)

# ─────────────────────────────────────────────────────────────
# Admin list
# ─────────────────────────────────────────────────────────────

def list_registrations(engine: Engine, status: str = "all") -> List[Registration]:
    rows = table_client.select_rows(
        engine, TABLE, filters=filter_predicate(status), order_by="created_at", descending=True,
    )
    return [Registration.from_row(r) for r in rows]

def count_registrations(engine: Engine, status: str = "all") -> int:
    return table_client.count_rows(engine, TABLE, filter_predicate(status))

# ─────────────────────────────────────────────────────────────
# Detail view
# ─────────────────────────────────────────────────────────────

def get_registration(engine: Engine, registration_id: str) -> Registration:
    return Registration.from_row(_row_or_404(engine, registration_id))

def update_registration(engine: Engine, registration_id: str, draft: RegistrationDraft) -> Registration:
    _check_draft(draft)
    values = _normalize(draft)
    _row_or_404(engine, registration_id)

    if cpf_exists(engine, values["cpf"], exclude_id=registration_id):
        raise DuplicateCpfError(MSG_DUPLICATE_CPF)

    try:
        rows = table_client.update_rows(engine, TABLE, values, {"id": registration_id})
    except ConstraintError as e:
        if _is_cpf_conflict(e):
            raise DuplicateCpfError(MSG_DUPLICATE_CPF) from e
        raise
    if not rows:
        raise NotFoundError(f"Cadastro {registration_id} não encontrado")
    logger.info("Registration %s edited", registration_id)
    return Registration.from_row(rows[0])

def set_verified(engine: Engine, registration_id: str, verified: bool) -> Registration:
    rows = table_client.update_rows(engine, TABLE, {"verified": bool(verified)}, {"id": registration_id})
    if not rows:
        raise NotFoundError(f"Cadastro {registration_id} não encontrado")

    stored = Registration.from_row(rows[0])
    if stored.verified != bool(verified):
        logger.error("Registration %s: verified=%s not persisted (store has %s)",
                     registration_id, verified, stored.verified)
        raise PersistenceMismatchError("A atualização não foi persistida no banco de dados")

    logger.info("Registration %s verified=%s", registration_id, stored.verified)
    return stored

def toggle_verified(engine: Engine, registration_id: str) -> Registration:
    current = get_registration(engine, registration_id)
    return set_verified(engine, registration_id, not current.verified)

def set_payment_method(engine: Engine, registration_id: str, method: Optional[str]) -> Registration:
    method = method or None
    if method is not None and method not in PAYMENT_METHODS:
        raise ValidationError(MSG_BAD_PAYMENT)

    rows = table_client.update_rows(engine, TABLE, {"payment_method": method}, {"id": registration_id})
    if not rows:
        raise NotFoundError(f"Cadastro {registration_id} não encontrado")
    logger.info("Registration %s payment_method=%s", registration_id, method)
    return Registration.from_row(rows[0])

def delete_registration(engine: Engine, registration_id: str) -> None:
    deleted = table_client.delete_rows(engine, TABLE, {"id": registration_id})
    if not deleted:
        raise NotFoundError(f"Cadastro {registration_id} não encontrado")
    logger.info("Registration %s deleted", registration_id)
