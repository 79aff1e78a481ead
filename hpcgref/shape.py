"""Process-grid shapes: prime factoring, near-cubic 3D factorizations and aspect checks."""

from __future__ import annotations

import math
from itertools import product
from typing import Iterator


class AspectRatioError(ValueError):
    """Raised when a 3D shape is too far from a cube."""

    def __init__(self, what: str, dims: tuple[int, int, int], ratio: float, smallest: float) -> None:
        x, y, z = dims
        super().__init__(
            f"The {what} sizes ({x},{y},{z}) are invalid because the ratio "
            f"min(x,y,z)/max(x,y,z)={ratio:g} is too small "
            f"(at least {smallest:g} is required). "
            "The shape should resemble a 3D cube. Please adjust and try again."
        )
        self.what = what
        self.dims = dims
        self.ratio = ratio
        self.smallest = smallest


def prime_factors(n: int) -> dict[int, int]:
    """Return the prime factorization of ``n`` as an ascending ``{prime: count}`` dict.

    ``1`` is reported as ``{1: 1}`` so that the result is never empty.
    """
    if n < 1:
        raise ValueError(f"cannot factor {n}: a positive integer is required")
    factors: dict[int, int] = {}
    limit = int(math.sqrt(n)) + 1

    while n > 1 and n % 2 == 0:
        factors[2] = factors.get(2, 0) + 1
        n //= 2

    for d in range(3, limit + 1, 2):
        while n % d == 0:
            factors[d] = factors.get(d, 0) + 1
            n //= d

    if n > 1 or not factors:
        factors[n] = factors.get(n, 0) + 1
    return dict(sorted(factors.items()))


def _distributions(maxima: list[int]) -> Iterator[tuple[int, ...]]:
    """Yield every non-zero digit tuple bounded by ``maxima``, lowest digit varying fastest."""
    ranges = [range(m + 1) for m in reversed(maxima)]
    for digits in product(*ranges):
        counts = tuple(reversed(digits))
        if any(counts):
            yield counts


def _factor_product(primes: list[int], counts: tuple[int, ...]) -> int:
    return math.prod(p**c for p, c in zip(primes, counts))


def _min_area_shape(xyz: int, primes: list[int], counts: list[int]) -> tuple[int, int, int]:
    best: tuple[int, int, int] | None = None
    min_area = 2.0 * xyz + 1.0
    for c1 in _distributions(counts):
        remaining = [total - used for total, used in zip(counts, c1)]
        tf1 = _factor_product(primes, c1)
        for c2 in _distributions(remaining):
            tf2 = _factor_product(primes, c2)
            tf3 = xyz // tf1 // tf2
            area = tf1 * float(tf2) + tf2 * float(tf3) + tf1 * float(tf3)
            if area < min_area:
                min_area = area
                best = (tf1, tf2, tf3)
    if best is None:
        raise ValueError(f"no three-way factorization found for {xyz}")
    return best


def compute_optimal_shape(xyz: int) -> tuple[int, int, int]:
    """Split ``xyz`` into three factors whose box has the smallest surface area."""
    factors = prime_factors(xyz)
    primes = list(factors)
    counts = list(factors.values())

    if len(primes) == 1:
        p, c = primes[0], counts[0]
        third = c // 3
        z = p**third
        y = p ** (third + (1 if c % 3 >= 2 else 0))
        x = p ** (third + (1 if c % 3 >= 1 else 0))
        return x, y, z

    if len(primes) == 2 and counts == [1, 1]:
        return primes[0], primes[1], 1

    if len(primes) == 2 and sum(counts) == 3:
        z = primes[0] if counts[0] == 2 else primes[1]
        return primes[0], primes[1], z

    if len(primes) == 3 and counts == [1, 1, 1]:
        return primes[0], primes[1], primes[2]

    return _min_area_shape(xyz, primes, counts)


def cubic_radical_search(n: int) -> tuple[int, int, int]:
    """Find the factorization ``n = x*y*z`` maximising min(x,y,z)/max(x,y,z)."""
    if n < 1:
        raise ValueError(f"cannot factor {n}: a positive integer is required")
    best = 0.0
    result = (n, 1, 1)
    for f1 in range(int(n ** (1.0 / 3.0) + 0.5), 0, -1):
        if n % f1:
            continue
        n1 = n // f1
        for f2 in range(int(n1**0.5 + 0.5), 0, -1):
            if n1 % f2:
                continue
            f3 = n1 // f2
            current = min(f1, f2, f3) / max(f1, f2, f3)
            if current > best:
                best = current
                result = (f1, f2, f3)
    return result


def check_aspect_ratio(smallest_ratio: float, x: int, y: int, z: int, what: str) -> float:
    """Return min/max of the sizes, raising :class:`AspectRatioError` if it is below ``smallest_ratio``."""
    ratio = min(x, y, z) / float(max(x, y, z))
    if ratio < smallest_ratio:
        raise AspectRatioError(what, (x, y, z), ratio, smallest_ratio)
    return ratio