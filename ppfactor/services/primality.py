"""
Miller-Rabin primality testing over any unsigned integer type.

The single-trial test is exact Miller-Rabin: a Composite verdict is always
right, a ProbablyPrime verdict is wrong for a composite with probability at
most 1/4. almost_surely_prime repeats the test over random witnesses, so for
the default 14 trials a composite slips through with probability at most
4^-14 (about 3.7e-9).

Reference: D. E. Knuth, The Art of Computer Programming, vol. 2, 3rd ed.,
pp. 395-396 (Algorithm P).
"""
import logging
import random
from enum import Enum
from typing import Optional

from ..models.factors import OperationStatistics
from ..utils.number_utils import power_mod

logger = logging.getLogger(__name__)

NUM_PRIME_TEST_TRIALS = 14


class Primality(str, Enum):
    PRIME = "prime"
    COMPOSITE = "composite"
    PROBABLY_PRIME = "probably_prime"


class UniformRandomIntegers:
    """
    Uniform random integers in [0, n) of the same type as n.

    A fresh generator is seeded from system entropy unless one is injected;
    tests inject a generator (anything with randrange) to fix the witnesses.
    """

    def __init__(self, n, rng: Optional[random.Random] = None):
        self.n = n
        self.kind = type(n)
        self.rng = rng if rng is not None else random.Random()

    def rand(self):
        # randrange(0) is empty; a zero witness is replaced by the caller anyway
        upper = max(int(self.n), 1)
        return self.kind(self.rng.randrange(upper))


def miller_rabin_test(n, witness) -> Primality:
    """
    One Miller-Rabin trial of n with the given witness.

    Args:
        n: number to test, n >= 0
        witness: base x with 1 < x < n for n > 6

    Returns:
        PRIME for 2, 3, 5; COMPOSITE for 0, 1, 4, multiples of 2, 3, 5 and
        whenever the witness proves n composite; PROBABLY_PRIME otherwise.

    Example:
        97 - 1 = 2^5 * 3. With witness 10 the sequence 10^3, 10^6, ... mod 97 is
        30, 27, 50, 75, 96 and reaching 96 = n - 1 gives PROBABLY_PRIME.
    """
    if n == 0 or n == 1 or n == 4:
        return Primality.COMPOSITE
    if n == 2 or n == 3 or n == 5:
        return Primality.PRIME
    if n % 2 == 0 or n % 3 == 0 or n % 5 == 0:
        return Primality.COMPOSITE

    # n - 1 = 2^k q with q odd
    q = n - 1
    k = 0
    while q % 2 == 0:
        q //= 2
        k += 1

    y = power_mod(witness, q, n)
    n_minus_1 = n - 1
    for j in range(k):
        if j == 0 and y == 1:
            return Primality.PROBABLY_PRIME
        if y == n_minus_1:
            return Primality.PROBABLY_PRIME
        # a 1 reached without passing through n - 1
        if j > 0 and y == 1:
            return Primality.COMPOSITE
        y = power_mod(y, 2, n)

    return Primality.COMPOSITE


def almost_surely_prime(n, rng: Optional[random.Random] = None,
                        trials: int = NUM_PRIME_TEST_TRIALS,
                        stats: Optional[OperationStatistics] = None) -> bool:
    """
    Repeat Miller-Rabin over random witnesses.

    Returns False as soon as one witness proves n composite. Returns True for
    the small primes 2, 3, 5 and when every trial in the budget passes. Never
    runs more than `trials` trials.
    """
    if stats is not None:
        stats.primality_tests += 1

    randum = UniformRandomIntegers(n, rng)
    three = type(n)(3)
    for trial in range(1, trials + 1):
        x = randum.rand()
        # witness has to be > 1
        if x <= 1:
            x = three

        verdict = miller_rabin_test(n, x)
        if verdict == Primality.PRIME:
            return True
        if verdict == Primality.COMPOSITE:
            logger.debug(f"{n} is composite (witness {x}, trial {trial})")
            return False

    return True
