# utils/format_utils.py
from __future__ import annotations

import re
import datetime as dt
from typing import Optional
from zoneinfo import ZoneInfo

from config import APP_TZ

TZ = ZoneInfo(APP_TZ)

CPF_MAX_LEN = 14      # ###.###.###-##
CEP_MAX_LEN = 10      # ##.###-###
PHONE_MAX_LEN = 15    # (##) #####-####

_NON_DIGIT = re.compile(r"\D")


def digits_only(value: Optional[str]) -> str:
    return _NON_DIGIT.sub("", str(value or ""))


def format_cpf(value: Optional[str]) -> str:
    d = digits_only(value)[:11]
    if len(d) <= 3:
        return d
    if len(d) <= 6:
        return f"{d[:3]}.{d[3:]}"
    if len(d) <= 9:
        return f"{d[:3]}.{d[3:6]}.{d[6:]}"
    return f"{d[:3]}.{d[3:6]}.{d[6:9]}-{d[9:]}"


def format_cep(value: Optional[str]) -> str:
    d = digits_only(value)[:8]
    if len(d) <= 2:
        return d
    if len(d) <= 5:
        return f"{d[:2]}.{d[2:]}"
    return f"{d[:2]}.{d[2:5]}-{d[5:]}"


def format_phone(value: Optional[str]) -> str:
    d = digits_only(value)[:11]
    if len(d) <= 2:
        return d
    if len(d) <= 6:
        return f"({d[:2]}) {d[2:]}"
    if len(d) <= 10:
        # landline shape until the 11th (mobile) digit arrives
        return f"({d[:2]}) {d[2:6]}-{d[6:]}"
    return f"({d[:2]}) {d[2:7]}-{d[7:]}"


def format_timestamp(value) -> str:
    """dd/mm/YYYY HH:MM in the app timezone; naive values are taken as UTC."""
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        try:
            value = dt.datetime.fromisoformat(value)
        except ValueError:
            return value
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(TZ).strftime("%d/%m/%Y %H:%M")
