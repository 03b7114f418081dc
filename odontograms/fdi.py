"""
FDI two-digit tooth numbering.

Permanent teeth: quadrants 1-4, positions 1-8 (11-18, 21-28, 31-38, 41-48).
Temporary teeth: quadrants 5-8, positions 1-5 (51-55, 61-65, 71-75, 81-85).
"""
PERMANENT_TEETH = tuple(q * 10 + p for q in (1, 2, 3, 4) for p in range(1, 9))
TEMPORARY_TEETH = tuple(q * 10 + p for q in (5, 6, 7, 8) for p in range(1, 6))

SURFACES = ('O', 'M', 'D', 'V', 'L', 'P')


def teeth_for(dentition):
    if dentition == 'permanent':
        return PERMANENT_TEETH
    if dentition == 'temporary':
        return TEMPORARY_TEETH
    return PERMANENT_TEETH + TEMPORARY_TEETH


def is_valid_tooth(number, dentition):
    return number in teeth_for(dentition)
