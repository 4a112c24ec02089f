from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} wajib diisi")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value.strip()) < min_len:
        raise ValidationError(f"{field_name} minimal {min_len} karakter")
    return value.strip()


def require_positive_id(value, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} tidak valid")
    if parsed <= 0:
        raise ValidationError(f"{field_name} tidak valid")
    return parsed


def require_non_negative_int(value, field_name: str) -> int:
    try:
        parsed = int(value or 0)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} harus berupa angka")
    if parsed < 0:
        raise ValidationError(f"{field_name} tidak boleh negatif")
    return parsed
