"""Alpha threshold policy by sample bit depth."""

from typing import Union

AlphaThreshold = Union[int, float]

ALPHA_THRESHOLD_8BIT = 2        # 0..255
ALPHA_THRESHOLD_16BIT = 256     # 0..65535
ALPHA_THRESHOLD_FLOAT = 0.002   # 0.0..1.0


def alpha_threshold(component_size: int) -> AlphaThreshold:
    """Return the minimum alpha sample treated as fully opaque.

    Args:
        component_size: Bits per sample (8, 16 or 32 for float samples)

    Returns:
        Threshold on the sample's own scale. Unknown depths fall back to
        the 8-bit threshold.
    """
    if component_size == 16:
        return ALPHA_THRESHOLD_16BIT
    if component_size == 32:
        return ALPHA_THRESHOLD_FLOAT
    return ALPHA_THRESHOLD_8BIT
