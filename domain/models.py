from dataclasses import dataclass, asdict, field, fields
from typing import Optional, Dict, Any
from datetime import datetime

# ── Choice sets ───────────────────────────────────────────────
MARITAL_STATUSES = ["Casado", "Namorando", "Outros"]

CONTACT_LABELS = {
    "Casado": "Nome do Marido",
    "Namorando": "Nome do Namorado",
    "Outros": "Nome do Contato mais Próximo",
}

PAYMENT_BOLETO = "Boleto"
PAYMENT_BOLETO_SENT = "Boleto Enviado"
PAYMENT_CARD = "Cartão"
PAYMENT_METHODS = [PAYMENT_BOLETO, PAYMENT_BOLETO_SENT, PAYMENT_CARD]

# ── Admin filters ─────────────────────────────────────────────
# selector -> (select label, total label, equality predicate)
FILTERS: Dict[str, tuple] = {
    "all":            ("Todos os Status", "Total de Cadastros",       {}),
    "pending":        ("Pendentes",       "Total de Pendentes",       {"verified": False}),
    "verified":       ("Conferidos",      "Total de Conferidos",      {"verified": True}),
    "boleto":         ("Boleto",          "Total de Boleto",          {"payment_method": PAYMENT_BOLETO}),
    "boleto-enviado": ("Boleto Enviado",  "Total de Boleto Enviado",  {"payment_method": PAYMENT_BOLETO_SENT}),
    "cartao":         ("Cartão",          "Total de Cartão",          {"payment_method": PAYMENT_CARD}),
}


def filter_predicate(status: str) -> Dict[str, Any]:
    """Equality filter shared by the list and the count queries."""
    if status not in FILTERS:
        raise ValueError(f"Unknown filter: {status!r}")
    return dict(FILTERS[status][2])


def contact_label(marital_status: str) -> str:
    return CONTACT_LABELS.get(marital_status, "Nome do Contato")


@dataclass
class RegistrationDraft:
    """Editable fields of a registration, as typed into the form."""
    nome_completo: str = ""
    cpf: str = ""
    whats_participante: str = ""
    cep: str = ""
    endereco: str = ""
    numero: str = ""
    bairro: str = ""
    cidade: str = ""
    estado: str = ""
    estado_civil: str = ""
    nome_contato: str = ""
    whatsapp_contato: str = ""

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "RegistrationDraft":
        return cls(**{k: str(data.get(k) or "") for k in cls.field_names()})


@dataclass
class Registration:
    id: str
    nome_completo: str
    cpf: str
    cep: str
    endereco: str
    numero: str
    bairro: str
    cidade: str
    estado: str
    estado_civil: str
    whats_participante: Optional[str] = None
    nome_contato: Optional[str] = None
    whatsapp_contato: Optional[str] = None
    verified: bool = False
    payment_method: Optional[str] = None
    created_at: Optional[datetime] = None
    sequence_number: Optional[int] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Registration":
        data = {f.name: row.get(f.name) for f in fields(cls)}
        data["verified"] = bool(data.get("verified"))
        created = data.get("created_at")
        if isinstance(created, str):
            data["created_at"] = datetime.fromisoformat(created)
        if data.get("sequence_number") is not None:
            data["sequence_number"] = int(data["sequence_number"])
        return cls(**data)

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)

    def to_draft(self) -> RegistrationDraft:
        return RegistrationDraft.from_mapping(self.to_row())


@dataclass
class Settings:
    id: int = 1
    is_registration_closed: bool = False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Settings":
        return cls(id=int(row.get("id") or 1), is_registration_closed=bool(row.get("is_registration_closed")))


@dataclass
class CepAddress:
    cep: str
    logradouro: str = ""
    bairro: str = ""
    localidade: str = ""
    uf: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)
