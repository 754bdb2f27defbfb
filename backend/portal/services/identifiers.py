from __future__ import annotations

import re

from portal.core.errors import DuplicateDocument

_ONLY_DIGITS = re.compile(r"\D+")

_CNPJ_FIRST_WEIGHTS = (5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
_CNPJ_SECOND_WEIGHTS = (6, 5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2)
_CPF_FIRST_WEIGHTS = tuple(range(10, 1, -1))
_CPF_SECOND_WEIGHTS = tuple(range(11, 1, -1))


def normalize_digits(value: str | None) -> str:
    return _ONLY_DIGITS.sub("", value or "")


def _check_digit(digits: str, weights: tuple[int, ...]) -> int:
    remainder = sum(int(d) * w for d, w in zip(digits, weights)) % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cnpj(value: str | None) -> bool:
    """Check a CNPJ (14 digits, mod-11 check digits). Formatting characters are ignored."""
    cnpj = normalize_digits(value)
    if len(cnpj) != 14 or cnpj == cnpj[0] * 14:
        return False
    if int(cnpj[12]) != _check_digit(cnpj[:12], _CNPJ_FIRST_WEIGHTS):
        return False
    return int(cnpj[13]) == _check_digit(cnpj[:13], _CNPJ_SECOND_WEIGHTS)


def is_valid_cpf(value: str | None) -> bool:
    """Check a CPF (11 digits, mod-11 check digits). Formatting characters are ignored."""
    cpf = normalize_digits(value)
    if len(cpf) != 11 or cpf == cpf[0] * 11:
        return False
    if int(cpf[9]) != _check_digit(cpf[:9], _CPF_FIRST_WEIGHTS):
        return False
    return int(cpf[10]) == _check_digit(cpf[:10], _CPF_SECOND_WEIGHTS)


def format_cnpj(value: str | None) -> str:
    cnpj = normalize_digits(value)
    if len(cnpj) != 14:
        return value or ""
    return f"{cnpj[:2]}.{cnpj[2:5]}.{cnpj[5:8]}/{cnpj[8:12]}-{cnpj[12:]}"


def format_cpf(value: str | None) -> str:
    cpf = normalize_digits(value)
    if len(cpf) != 11:
        return value or ""
    return f"{cpf[:3]}.{cpf[3:6]}.{cpf[6:9]}-{cpf[9:]}"


def validate_document_pair(primary: str | None, optional: str | None) -> None:
    """Refuse the same file sent as both the supporting and the optional document."""
    if primary and optional and primary == optional:
        raise DuplicateDocument("Arquivo duplicado")
