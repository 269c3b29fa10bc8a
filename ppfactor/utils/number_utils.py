import re


def validate_integer(number_str: str) -> bool:
    """Validate that string represents a positive integer."""
    if not isinstance(number_str, str):
        return False

    # Check if string contains only digits
    if not re.match(r'^\d+$', number_str):
        return False

    # Check for leading zeros (except single "0")
    if len(number_str) > 1 and number_str[0] == '0':
        return False

    return True


def gcd(a, b):
    """Calculate greatest common divisor using Euclidean algorithm."""
    while b:
        a, b = b, a % b
    return a


def abs_difference(a, b):
    """|a - b| without ever subtracting below zero."""
    return a - b if a > b else b - a


def power_mod(base, exponent, modulus):
    """base^exponent mod modulus for any type that supports three-argument pow."""
    # three-argument pow never falls back to the modulus type's __rpow__
    if type(base) is not type(modulus):
        base = type(modulus)(base)
    return pow(base, exponent, modulus)


def prime_power_product(factors, one):
    """
    Multiply out a list of prime factors.

    Args:
        factors: iterable of PrimeFactor
        one: the unit of the integer type the product is computed in

    Returns:
        product of prime^multiplicity over all factors
    """
    product = one
    for factor in factors:
        for _ in range(factor.multiplicity):
            product *= factor.prime
    return product


def verify_complete_factorization(number, factors) -> bool:
    """
    Verify that the product of prime powers equals the number.
    An empty list verifies only the number 1.
    """
    return prime_power_product(factors, type(number)(1)) == number
