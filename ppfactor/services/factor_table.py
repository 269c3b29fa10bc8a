"""
Table lookup for the prime factorization of p^n - 1.

One text file per small base p, named c{pp}minus.txt (c03minus.txt for p = 3),
holds known factorizations in the layout of the Cunningham project tables:

    free-form comment lines ...
        n  #Fac  Factorisation
        20    10  2^4.5^2.11^2.61.1181
        36    10  3^3.5.7.13.19.37.\\
                  73.109

Factors are separated by dots, powers are written prime^exponent. A physical
line ending in a backslash (split inside a number) or in a dot (split between
factors) continues on the next line. Lines containing '+' hold incomplete
factorizations and are skipped.

Where the lines come from is pluggable: FileSystemTableLocator searches a
directory tree, InMemoryTableLocator serves text held in memory.
"""
import logging
import random
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Protocol, Union

from ..models.factors import OperationStatistics, PrimeFactor
from ..utils.errors import CorruptTableData, MissingFactorTable
from .primality import NUM_PRIME_TEST_TRIALS, almost_surely_prime

logger = logging.getLogger(__name__)

# Bases with a factor table; 6, 10 and 12 are not primes but are tabulated too.
FACTOR_TABLE_NAMES: Dict[int, str] = {
    p: f"c{p:02d}minus.txt" for p in (2, 3, 5, 6, 7, 10, 11, 12)
}


class TablePatterns:
    """Compiled regex patterns for factor table parsing."""

    # Header right before the factorizations, e.g. "    n  #Fac  Factorisation"
    HEADER = re.compile(r'^\s*n\s*#Fac\s+Factorisation')

    # A line that continues on the next one ends in a backslash or a dot
    CONTINUATION = re.compile(r'.*(\\|\.)$')

    # One factor token: prime or prime^exponent
    FACTOR_TOKEN = re.compile(r'^(\d+)(?:\^(\d+))?$')


def read_logical_lines(physical_lines: Iterable[str]) -> Iterator[str]:
    """
    Join continuation lines into logical factorization lines.

    Lines before the header are skipped, as is the header itself. A trailing
    backslash is dropped when joining (the number continues); a trailing dot is
    kept (it separates factors). Blank lines outside a continuation are ignored.
    """
    found_header = False
    pending = None

    for raw in physical_lines:
        line = raw.rstrip('\r\n').rstrip()

        if not found_header:
            if TablePatterns.HEADER.match(line):
                found_header = True
            continue

        if pending is None:
            if not line.strip():
                continue
            if TablePatterns.CONTINUATION.match(line):
                pending = line
            else:
                yield line.strip()
            continue

        if pending.endswith('\\'):
            pending = pending[:-1]
        pending += line.strip()
        if not TablePatterns.CONTINUATION.match(line):
            yield pending.strip()
            pending = None

    if pending is not None:
        # table ended mid-continuation
        yield pending.rstrip('\\').strip()


class TableLocator(Protocol):
    """Given a base p, produce the logical lines of its factor table."""

    def logical_lines(self, p: int) -> Iterator[str]: ...


class FileSystemTableLocator:
    """Find c{pp}minus.txt files anywhere under a root directory."""

    def __init__(self, root: Union[str, Path] = "."):
        self.root = Path(root)

    def find_table(self, p: int) -> Path:
        """
        Locate the table file for p.

        The first match of a recursive search wins. Search order is up to the
        filesystem, so duplicate file names under the root are reported.

        Raises:
            MissingFactorTable: if no file of the expected name exists
        """
        name = FACTOR_TABLE_NAMES[p]
        matches = sorted(path for path in self.root.rglob(name) if path.is_file())
        if not matches:
            raise MissingFactorTable(p, name, str(self.root))
        if len(matches) > 1:
            logger.warning(
                f"Found {len(matches)} factor tables named {name} under {self.root}; "
                f"using {matches[0]}"
            )
        logger.debug(f"Factor table for p = {p}: {matches[0]}")
        return matches[0]

    def logical_lines(self, p: int) -> Iterator[str]:
        path = self.find_table(p)
        with open(path, 'r', encoding='utf-8') as f:
            yield from read_logical_lines(f)


class InMemoryTableLocator:
    """Serve factor tables from text kept in memory, keyed by p."""

    def __init__(self, tables: Dict[int, str]):
        self.tables = dict(tables)

    def logical_lines(self, p: int) -> Iterator[str]:
        if p not in self.tables:
            raise MissingFactorTable(p, FACTOR_TABLE_NAMES.get(p, f"c{p:02d}minus.txt"))
        return read_logical_lines(self.tables[p].splitlines())


def parse_factor_spec(spec: str, kind=int) -> List[PrimeFactor]:
    """
    Parse a dot-separated factor list such as 2^4.5^2.11^2.61.1181.

    Raises:
        CorruptTableData: if a token is empty or not prime or prime^exponent
    """
    factors = []
    tokens = spec.split('.')
    if tokens and not tokens[-1]:
        # trailing dot left over from a continuation
        tokens.pop()
    for token in tokens:
        if not token:
            raise CorruptTableData(f"Empty factor in '{spec}'")
        match = TablePatterns.FACTOR_TOKEN.match(token)
        if not match:
            raise CorruptTableData(f"Cannot parse factor '{token}' in '{spec}'")
        prime, exponent = match.groups()
        multiplicity = int(exponent) if exponent else 1
        if multiplicity == 0:
            raise CorruptTableData(f"Zero exponent in factor '{token}'")
        factors.append(PrimeFactor(kind(int(prime)), multiplicity))
    return factors


def lookup_table(p: int, n: int, locator: TableLocator, kind=int,
                 rng: Optional[random.Random] = None,
                 trials: int = NUM_PRIME_TEST_TRIALS,
                 stats: Optional[OperationStatistics] = None) -> Optional[List[PrimeFactor]]:
    """
    Look up and validate the factorization of p^n - 1.

    Args:
        p: table base
        n: exponent
        locator: source of table lines
        kind: integer type for the returned primes

    Returns:
        The prime factors in table order, or None when p has no table or the
        table has no complete entry for n.

    Raises:
        MissingFactorTable: p is covered but its table cannot be found
        CorruptTableData: the entry is malformed, lists a non-prime, or does
            not multiply out to p^n - 1
    """
    if p not in FACTOR_TABLE_NAMES or n is None or n < 1:
        return None

    for line in locator.logical_lines(p):
        if '+' in line:
            continue

        fields = line.split(None, 2)
        if len(fields) < 3 or not fields[0].isdigit():
            logger.warning(f"Skipping unparseable line in factor table for p = {p}: {line[:60]}")
            continue
        if int(fields[0]) != n:
            continue

        factors = parse_factor_spec(fields[2], kind)
        if fields[1].isdigit():
            count = sum(f.multiplicity for f in factors)
            if int(fields[1]) != count:
                logger.warning(
                    f"Factor table for p = {p}, n = {n} says {fields[1]} factors but lists {count}"
                )

        for factor in factors:
            if not almost_surely_prime(factor.prime, rng=rng, trials=trials, stats=stats):
                raise CorruptTableData(
                    f"Distinct prime factor p = {factor.prime} of {p}^{n} - 1 fails the primality test"
                )

        # p^n alone can overflow a fixed-width kind even when p^n - 1 fits
        expected = int(p) ** n - 1
        product = 1
        for factor in factors:
            product *= int(factor.prime) ** factor.multiplicity
        if product != expected:
            raise CorruptTableData(
                f"Product of factors {product} doesn't equal the number {p}^{n} - 1 = {expected}"
            )
        return factors

    logger.debug(f"Factor table for p = {p} has no complete entry for n = {n}")
    return None
