"""
Trial division with a 2-3 wheel.

Method from D. E. Knuth, The Art of Computer Programming, vol. 2, 3rd ed.,
Algorithm A, pp. 364-365. Running time is O(max(sqrt(p_{t-1}), p_t)) where p_t
is the largest prime divisor and p_{t-1} the next largest.

After dividing out 2 and 3, the divisors d = 5, 7, 11, 13, 17, 19, ... step by
2 and 4 alternately, which skips every multiple of 2 and 3 but no prime.
Composite d never divide the remaining n since their prime factors are already
gone.

The loop stops when n reaches 1 or when d does not divide n and the quotient
q = n // d is below d. In that case n is prime: were it composite, its smallest
prime factor p would exceed d, so n >= p^2 >= (d + 1)^2 > d^2 + d > q*d + r = n.
"""
import logging
from typing import List, Optional

from ..models.factors import OperationStatistics, PrimeFactor
from ..utils.errors import FactorArgumentError

logger = logging.getLogger(__name__)


def _divide_out(n, d, stats: OperationStatistics):
    count = 0
    while n % d == 0:
        n //= d
        count += 1
        stats.trial_divisions += 1
    return n, count


def trial_divide(n, stats: Optional[OperationStatistics] = None) -> List[PrimeFactor]:
    """
    Factor n >= 1 completely. Always terminates and is always correct.

    Returns:
        PrimeFactor entries in ascending order; empty for n = 1.

    Example:
        156 = 2^2 * 3 * 13. After removing 2s and 3s n = 13, and d = 5 gives
        q = 2 < 5 with r = 3, so 13 is the last prime factor.
    """
    if n == 0:
        raise FactorArgumentError("Cannot factor zero")
    if stats is None:
        stats = OperationStatistics()

    kind = type(n)
    factors = []

    for small in (2, 3):
        n, count = _divide_out(n, kind(small), stats)
        if count:
            factors.append(PrimeFactor(kind(small), count))
    logger.debug(f"After removing powers of 2 and 3, n = {n}")

    d = kind(5)
    step_by_two = True
    new_d = True
    while n != 1:
        q, r = divmod(n, d)
        stats.trial_divisions += 1

        if r == 0:
            n = q
            if new_d:
                factors.append(PrimeFactor(d, 1))
                new_d = False
            else:
                last = factors[-1]
                factors[-1] = PrimeFactor(last.prime, last.multiplicity + 1)
            continue

        if q < d:
            # the current n is prime; it is the last factor
            factors.append(PrimeFactor(n, 1))
            break

        d += 2 if step_by_two else 4
        step_by_two = not step_by_two
        new_d = True

    logger.debug(f"Trial division found {len(factors)} distinct primes "
                 f"in {stats.trial_divisions} divisions")
    return factors
