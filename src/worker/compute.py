from __future__ import annotations

import math


def heavy_computation(iterations: int) -> float:
    """Sum of sqrt(i) * sin(i) over i in [0, iterations).

    Pure and CPU-bound; kept at module level so worker processes can import it.
    """

    result = 0.0
    for i in range(iterations):
        result += math.sqrt(i) * math.sin(i)
    return result
