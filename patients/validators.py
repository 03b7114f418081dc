"""
Field validators for Ecuadorian patient data
"""
import re

PHONE_RE = re.compile(r'^(\+593|0)[0-9]{9}$')
NAME_RE = re.compile(r'^[a-zA-ZáéíóúÁÉÍÓÚñÑüÜ\s]+$')

_CEDULA_COEFFICIENTS = (2, 1, 2, 1, 2, 1, 2, 1, 2)


def cedula_check_digit(first_nine):
    """Modulo-10 check digit over the first nine digits of a cédula"""
    total = 0
    for char, coefficient in zip(first_nine, _CEDULA_COEFFICIENTS):
        product = int(char) * coefficient
        if product >= 10:
            product -= 9
        total += product
    return 0 if total % 10 == 0 else 10 - total % 10


def is_valid_cedula(value):
    """
    Ecuadorian cédula: 10 digits, province 01-24, third digit below 6,
    last digit a modulo-10 check digit over the first nine.
    """
    if not value or len(value) != 10 or not value.isdigit():
        return False
    province = int(value[:2])
    if province < 1 or province > 24:
        return False
    if int(value[2]) >= 6:
        return False
    return cedula_check_digit(value[:9]) == int(value[9])


def is_valid_phone(value):
    return bool(value and PHONE_RE.match(value))
