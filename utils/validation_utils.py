# utils/validation_utils.py
from __future__ import annotations

from typing import List, Optional

from domain.models import RegistrationDraft, MARITAL_STATUSES
from utils.format_utils import digits_only

REQUIRED_FIELDS = [
    "nome_completo", "cpf", "cep", "endereco", "numero", "bairro", "cidade", "estado",
]

MSG_MARITAL_STATUS = "Por favor, selecione o estado civil"
MSG_CONTACT = "Por favor, preencha os dados de contato"
MSG_REQUIRED = "Por favor, preencha todos os campos obrigatórios"
MSG_INVALID_CPF = "CPF inválido"


def _check_digit(digits: str, start_weight: int) -> int:
    total = sum(int(d) * w for d, w in zip(digits, range(start_weight, 1, -1)))
    rest = total % 11
    return 0 if rest < 2 else 11 - rest


def validate_cpf(value: Optional[str]) -> bool:
    d = digits_only(value)
    if len(d) != 11 or d == d[0] * 11:
        return False
    first = _check_digit(d[:9], 10)
    second = _check_digit(d[:10], 11)
    return first == int(d[9]) and second == int(d[10])


def missing_required(draft: RegistrationDraft) -> List[str]:
    return [f for f in REQUIRED_FIELDS if not str(getattr(draft, f) or "").strip()]


def first_draft_error(draft: RegistrationDraft) -> Optional[str]:
    """
    Returns the first user-facing problem with a draft, or None.
    Order: marital status, contact pair, required fields, CPF digits.
    """
    if draft.estado_civil not in MARITAL_STATUSES:
        return MSG_MARITAL_STATUS

    has_name = bool(draft.nome_contato.strip())
    has_phone = bool(digits_only(draft.whatsapp_contato))
    if has_name != has_phone:
        return MSG_CONTACT

    if missing_required(draft):
        return MSG_REQUIRED

    if not validate_cpf(draft.cpf):
        return MSG_INVALID_CPF
    return None
