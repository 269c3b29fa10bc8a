#!/usr/bin/env python3
"""
Command-line front end: factor numbers and test primality.
"""
import argparse
import logging
import sys
from typing import List, Optional

from .config import get_settings
from .models.factors import FactoringStrategy
from .services.factorization import FactorizationService
from .services.primality import almost_surely_prime, miller_rabin_test
from .utils.errors import ArithmeticDomainError, FactorError
from .utils.integers import BigInt

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the ppfactor command."""
    parser = argparse.ArgumentParser(description='Prime factorization for primitive polynomial search')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    # factor
    factor = subparsers.add_parser('factor', help='Factor a number into primes')
    factor.add_argument('number', help='Positive integer to factor')
    factor.add_argument('--strategy', choices=[s.value for s in FactoringStrategy],
                        default=FactoringStrategy.AUTOMATIC.value,
                        help='Factoring algorithm (default: automatic)')
    factor.add_argument('--p', type=int, help='Base p when number = p^exponent - 1 (enables table lookup)')
    factor.add_argument('--exponent', '-n', type=int, help='Exponent when number = p^exponent - 1')
    factor.add_argument('--table-dir', help='Root directory of the factor tables (overrides config)')
    factor.add_argument('--stats', action='store_true', help='Print operation counts')

    # prime
    prime = subparsers.add_parser('prime', help='Test a number for primality')
    prime.add_argument('number', help='Integer to test')
    prime.add_argument('--witness', help='Also run one Miller-Rabin trial with this witness')

    return parser


def setup_logging(verbose: bool, level: str) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level),
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )


def run_factor(args) -> int:
    settings = get_settings()
    if args.table_dir:
        settings = settings.model_copy(update={'factor_table_dir': args.table_dir})
    service = FactorizationService.from_settings(settings)

    result = service.factorize(BigInt(args.number), args.strategy, args.p, args.exponent)
    print(result)
    if not result.succeeded:
        print(f"Incomplete: unfactored remainder {result.remainder}")
    if args.stats:
        for name, count in result.statistics.to_dict().items():
            print(f"  {name}: {count}")
    return 0 if result.succeeded else 1


def run_prime(args) -> int:
    settings = get_settings()
    n = BigInt(args.number)
    if args.witness is not None:
        verdict = miller_rabin_test(n, BigInt(args.witness))
        print(f"Miller-Rabin with witness {args.witness}: {verdict.value}")
    surely = almost_surely_prime(n, trials=settings.primality_trials)
    print(f"{n} is {'almost surely prime' if surely else 'composite'}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose, get_settings().log_level)

    try:
        if args.command == 'factor':
            return run_factor(args)
        return run_prime(args)
    except (FactorError, ArithmeticDomainError) as e:
        logger.error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
