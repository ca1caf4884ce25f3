import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from domain.models import RegistrationDraft
from utils.db import create_schema

VALID_CPF = "529.982.247-25"
OTHER_CPF = "111.444.777-35"


def cpf_from_base(base: str) -> str:
    """Append both check digits to a 9-digit base."""
    digits = [int(c) for c in base]
    for _ in range(2):
        weights = range(len(digits) + 1, 1, -1)
        rest = sum(d * w for d, w in zip(digits, weights)) % 11
        digits.append(0 if rest < 2 else 11 - rest)
    return "".join(str(d) for d in digits)


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    create_schema(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def make_draft():
    def _make(**overrides) -> RegistrationDraft:
        data = dict(
            nome_completo="Maria da Silva",
            cpf=VALID_CPF,
            whats_participante="11987654321",
            cep="01310-100",
            endereco="Avenida Paulista",
            numero="1000",
            bairro="Bela Vista",
            cidade="São Paulo",
            estado="SP",
            estado_civil="Casado",
            nome_contato="João da Silva",
            whatsapp_contato="11912345678",
        )
        data.update(overrides)
        return RegistrationDraft(**data)
    return _make
