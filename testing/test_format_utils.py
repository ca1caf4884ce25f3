import datetime as dt

import pytest

from utils.format_utils import (
    CEP_MAX_LEN, CPF_MAX_LEN, PHONE_MAX_LEN,
    digits_only, format_cep, format_cpf, format_phone, format_timestamp,
)


def test_digits_only():
    assert digits_only("529.982.247-25") == "52998224725"
    assert digits_only(None) == ""
    assert digits_only("abc") == ""


@pytest.mark.parametrize("raw, expected", [
    ("", ""),
    ("529", "529"),
    ("5299", "529.9"),
    ("529982", "529.982"),
    ("5299822", "529.982.2"),
    ("529982247", "529.982.247"),
    ("5299822472", "529.982.247-2"),
    ("52998224725", "529.982.247-25"),
    ("52998224725999", "529.982.247-25"),
    ("529.982.247-25", "529.982.247-25"),
])
def test_format_cpf(raw, expected):
    assert format_cpf(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("01", "01"),
    ("013", "01.3"),
    ("01310", "01.310"),
    ("013101", "01.310-1"),
    ("01310100", "01.310-100"),
    ("01310-100", "01.310-100"),
    ("0131010099", "01.310-100"),
])
def test_format_cep(raw, expected):
    assert format_cep(raw) == expected


@pytest.mark.parametrize("raw, expected", [
    ("11", "11"),
    ("119", "(11) 9"),
    ("119876", "(11) 9876"),
    ("1198765", "(11) 9876-5"),
    ("1133334444", "(11) 3333-4444"),
    ("11987654321", "(11) 98765-4321"),
    ("1198765432100", "(11) 98765-4321"),
])
def test_format_phone(raw, expected):
    assert format_phone(raw) == expected


@pytest.mark.parametrize("fmt, value, max_len", [
    (format_cpf, "52998224725", CPF_MAX_LEN),
    (format_cep, "01310100", CEP_MAX_LEN),
    (format_phone, "11987654321", PHONE_MAX_LEN),
])
def test_formatters_are_idempotent_and_bounded(fmt, value, max_len):
    once = fmt(value)
    assert fmt(once) == once
    assert len(once) == max_len
    assert len(fmt(value + "999999")) <= max_len


def test_format_timestamp_uses_sao_paulo_time():
    value = dt.datetime(2025, 3, 10, 15, 30, tzinfo=dt.timezone.utc)
    assert format_timestamp(value) == "10/03/2025 12:30"


def test_format_timestamp_naive_and_strings():
    assert format_timestamp(dt.datetime(2025, 3, 10, 15, 30)) == "10/03/2025 12:30"
    assert format_timestamp("2025-03-10 15:30:00+00:00") == "10/03/2025 12:30"
    assert format_timestamp(None) == ""
    assert format_timestamp("not a date") == "not a date"
