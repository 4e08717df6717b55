"""
Frequency Normalizer

Every billing frequency is expressed as a number of fortnights so that
bills, savings and investments can be compared on one cadence.

DESIGN DECISION: The table holds exact fractions. Monthly is 26/12,
never a rounded 2.17, so sums over many allocations do not drift.
"""

from fractions import Fraction

from fortnight_budget.models.budget import FrequencyType


# 52 weeks / 2
FORTNIGHTS_PER_YEAR = 26

FORTNIGHTS_BY_FREQUENCY: dict[FrequencyType, Fraction] = {
    FrequencyType.WEEKLY: Fraction(1, 2),
    FrequencyType.FORTNIGHTLY: Fraction(1),
    FrequencyType.MONTHLY: Fraction(FORTNIGHTS_PER_YEAR, 12),
    FrequencyType.QUARTERLY: Fraction(FORTNIGHTS_PER_YEAR, 4),
    FrequencyType.YEARLY: Fraction(FORTNIGHTS_PER_YEAR),
}


class CalculationError(ValueError):
    """Base exception for the calculation core."""
    pass


class UnsupportedFrequencyError(CalculationError):
    """
    A frequency outside the closed set reached the core.

    Models reject unknown frequencies, so this means a programming error
    upstream rather than bad user input.
    """
    pass


def fortnights_for(frequency: FrequencyType) -> Fraction:
    """
    Convert a frequency to its length in fortnights.

    Args:
        frequency: A FrequencyType or its string value

    Returns:
        Strictly positive number of fortnights

    Raises:
        UnsupportedFrequencyError: If the frequency is not in the table
    """
    try:
        return FORTNIGHTS_BY_FREQUENCY[FrequencyType(frequency)]
    except (ValueError, KeyError) as e:
        raise UnsupportedFrequencyError(
            f"Unsupported frequency: {frequency!r}"
        ) from e
