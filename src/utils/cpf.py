# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""CPF (Cadastro de Pessoas Físicas) helpers.

A CPF has 11 digits; the last two are check digits computed from the
first nine with descending weights (mod 11). Input may be masked
("529.982.247-25") or bare ("52998224725"); it is always persisted as
digits only.
"""

import re

_NON_DIGITS = re.compile(r"[^0-9]")

CPF_LENGTH = 11


def normalize_cpf(raw: str | None) -> str:
    """Strip every non-digit character from a CPF.

    Args:
        raw: CPF with or without mask.

    Returns:
        Digits only (possibly empty).
    """
    return _NON_DIGITS.sub("", raw or "")


def _check_digit(digits: str) -> int:
    weight = len(digits) + 1
    total = sum(int(d) * (weight - i) for i, d in enumerate(digits))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(raw: str | None) -> bool:
    """Check a CPF's length and check digits.

    Repeated-digit sequences (e.g. 11111111111) satisfy the checksum but
    are rejected.

    Args:
        raw: CPF with or without mask.

    Returns:
        True if the CPF is valid.
    """
    if raw is None or not raw.strip():
        return False

    cpf = normalize_cpf(raw)
    if len(cpf) != CPF_LENGTH:
        return False

    if cpf == cpf[0] * CPF_LENGTH:
        return False

    d1 = _check_digit(cpf[:9])
    d2 = _check_digit(cpf[:9] + str(d1))
    return cpf[9:] == f"{d1}{d2}"

