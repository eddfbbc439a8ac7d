"""
Amateur band lookup by frequency.
"""

from typing import Optional, Union

# (band, lower MHz, upper MHz), IARU allocations across regions
BAND_PLAN = (
    ("2190m", 0.1357, 0.1378),
    ("630m", 0.472, 0.479),
    ("160m", 1.8, 2.0),
    ("80m", 3.5, 4.0),
    ("60m", 5.06, 5.45),
    ("40m", 7.0, 7.3),
    ("30m", 10.1, 10.15),
    ("20m", 14.0, 14.35),
    ("17m", 18.068, 18.168),
    ("15m", 21.0, 21.45),
    ("12m", 24.89, 24.99),
    ("10m", 28.0, 29.7),
    ("6m", 50.0, 54.0),
    ("4m", 70.0, 71.0),
    ("2m", 144.0, 148.0),
    ("1.25m", 222.0, 225.0),
    ("70cm", 420.0, 450.0),
    ("23cm", 1240.0, 1300.0),
)


def band_for_frequency(frequency: Union[str, float, None]) -> Optional[str]:
    """
    Get the band name for a frequency in MHz.

    Args:
        frequency: Frequency in MHz, as a number or string like ``"14.205"``

    Returns:
        Band name such as ``"20m"``, or None if outside every band
    """
    if frequency is None:
        return None
    try:
        mhz = float(str(frequency).strip())
    except ValueError:
        return None

    for band, lower, upper in BAND_PLAN:
        if lower <= mhz <= upper:
            return band
    return None
