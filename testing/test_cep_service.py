import pytest
import requests

from domain.errors import CepLookupError
from services import cep_service


class FakeResponse:
    def __init__(self, payload=None, status=200, bad_json=False):
        self.payload = payload
        self.status_code = status
        self.bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} error")

    def json(self):
        if self.bad_json:
            raise ValueError("no json")
        return self.payload


@pytest.fixture
def fake_get(monkeypatch):
    calls = []

    def install(result):
        def _get(url, timeout=None):
            calls.append((url, timeout))
            if isinstance(result, Exception):
                raise result
            return result
        monkeypatch.setattr(cep_service.requests, "get", _get)
        return calls
    return install


def test_found(fake_get):
    calls = fake_get(FakeResponse({
        "cep": "01310-100", "logradouro": "Avenida Paulista", "complemento": "de 612 a 1510 - lado par",
        "bairro": "Bela Vista", "localidade": "São Paulo", "uf": "SP", "ibge": "3550308",
    }))
    address = cep_service.lookup_cep("01.310-100")
    assert address.cep == "01.310-100"
    assert (address.logradouro, address.bairro, address.localidade, address.uf) == (
        "Avenida Paulista", "Bela Vista", "São Paulo", "SP")
    assert address.extra["ibge"] == "3550308"
    url, timeout = calls[0]
    assert url.endswith("/01310100/json/")
    assert timeout


def test_unknown_cep(fake_get):
    fake_get(FakeResponse({"erro": True}))
    assert cep_service.lookup_cep("99999999") is None


def test_incomplete_cep_skips_network(fake_get):
    calls = fake_get(FakeResponse({}))
    assert cep_service.lookup_cep("01.310-10") is None
    assert cep_service.lookup_cep("") is None
    assert calls == []


def test_timeout(fake_get):
    fake_get(requests.exceptions.Timeout("slow"))
    with pytest.raises(CepLookupError, match="Tempo esgotado"):
        cep_service.lookup_cep("01310100")


@pytest.mark.parametrize("result", [
    requests.exceptions.ConnectionError("down"),
    FakeResponse(status=500),
    FakeResponse(bad_json=True),
])
def test_service_failures(fake_get, result):
    fake_get(result)
    with pytest.raises(CepLookupError, match="Erro ao consultar"):
        cep_service.lookup_cep("01310100")
