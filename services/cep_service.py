# services/cep_service.py
import logging
from typing import Optional

import requests

from config import VIACEP_URL, CEP_TIMEOUT_SECONDS
from domain.errors import CepLookupError
from domain.models import CepAddress
from utils.format_utils import digits_only, format_cep

__all__ = ["lookup_cep"]

logger = logging.getLogger(__name__)


def lookup_cep(cep: str, *, timeout: Optional[float] = None) -> Optional[CepAddress]:
    """
    Street/neighborhood/city/state for an 8-digit CEP.
    None when the code is incomplete or unknown; CepLookupError when the service fails.
    """
    d = digits_only(cep)
    if len(d) != 8:
        return None

    url = f"{VIACEP_URL.rstrip('/')}/{d}/json/"
    try:
        response = requests.get(url, timeout=timeout or CEP_TIMEOUT_SECONDS)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        logger.exception("CEP lookup timed out for %s", d)
        raise CepLookupError("Tempo esgotado ao consultar o CEP") from e
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.exception("CEP lookup failed for %s", d)
        raise CepLookupError("Erro ao consultar o CEP") from e

    if not isinstance(data, dict) or data.get("erro"):
        logger.info("CEP %s not found", d)
        return None

    known = {"logradouro", "bairro", "localidade", "uf", "cep"}
    return CepAddress(
        cep=format_cep(d),
        logradouro=data.get("logradouro") or "",
        bairro=data.get("bairro") or "",
        localidade=data.get("localidade") or "",
        uf=data.get("uf") or "",
        extra={k: v for k, v in data.items() if k not in known},
    )
