"""Mathematical definitions behind the catalog functions.

Every rule checks its own domain and raises ValueError (or lets math raise
OverflowError) when the result is undefined. The dispatcher turns those into
UndefinedResultError with the function name and arguments attached.
"""
from __future__ import annotations

import math
from functools import reduce
from typing import Sequence


def _require(condition: bool, reason: str) -> None:
    if not condition:
        raise ValueError(reason)


# trigonometric

def sine(x: float) -> float:
    return math.sin(x)


def cosine(x: float) -> float:
    return math.cos(x)


def tangent(x: float) -> float:
    cos = math.cos(x)
    _require(cos != 0, "cosine of the argument is 0")
    return math.sin(x) / cos


def cotangent(x: float) -> float:
    sin = math.sin(x)
    _require(sin != 0, "sine of the argument is 0")
    return math.cos(x) / sin


def arcsine(x: float) -> float:
    _require(-1 <= x <= 1, "argument must be in [-1, 1]")
    return math.asin(x)


def arccosine(x: float) -> float:
    _require(-1 <= x <= 1, "argument must be in [-1, 1]")
    return math.acos(x)


def arctangent(x: float) -> float:
    return math.atan(x)


def arccotangent(x: float) -> float:
    return math.pi / 2 - math.atan(x)


# hyperbolic

def hyperbolic_sine(x: float) -> float:
    return math.sinh(x)


def hyperbolic_cosine(x: float) -> float:
    return math.cosh(x)


def hyperbolic_tangent(x: float) -> float:
    return math.tanh(x)


def hyperbolic_cotangent(x: float) -> float:
    tanh = math.tanh(x)
    _require(tanh != 0, "hyperbolic tangent of the argument is 0")
    return 1 / tanh


def area_sine(x: float) -> float:
    return math.asinh(x)


def area_cosine(x: float) -> float:
    _require(x >= 1, "argument must be >= 1")
    return math.acosh(x)


def area_tangent(x: float) -> float:
    _require(-1 < x < 1, "argument must be in (-1, 1)")
    return math.atanh(x)


def area_cotangent(x: float) -> float:
    _require(abs(x) > 1, "argument must be outside [-1, 1]")
    return 0.5 * math.log((x + 1) / (x - 1))


# rounding

def floor(x: float) -> float:
    return float(math.floor(x))


def ceiling(x: float) -> float:
    return float(math.ceil(x))


def round_half_away(x: float) -> float:
    # round() would round half to even; abs(x) + 0.5 is inexact near .5 and above 2**52
    magnitude = abs(x)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(float(whole), x)


def truncate(x: float) -> float:
    return float(math.trunc(x))


def absolute(x: float) -> float:
    return abs(x)


# exponential and logarithmic

def exponent(x: float) -> float:
    return math.exp(x)


def natural_log(x: float) -> float:
    _require(x > 0, "argument must be > 0")
    return math.log(x)


def decimal_log(x: float) -> float:
    _require(x > 0, "argument must be > 0")
    return math.log10(x)


def binary_log(x: float) -> float:
    _require(x > 0, "argument must be > 0")
    return math.log2(x)


def logarithm(base: float, x: float) -> float:
    _require(base > 0 and base != 1, "base must be > 0 and != 1")
    _require(x > 0, "argument must be > 0")
    return math.log(x, base)


def square_root(x: float) -> float:
    _require(x >= 0, "argument must be >= 0")
    return math.sqrt(x)


def cube_root(x: float) -> float:
    root = round(abs(x) ** (1 / 3))
    if root ** 3 == abs(x):
        return math.copysign(root, x)
    return math.copysign(abs(x) ** (1 / 3), x)


# misc

def sign(x: float) -> float:
    if x > 0:
        return 1.0
    if x < 0:
        return -1.0
    return 0.0


def degrees(x: float) -> float:
    return math.degrees(x)


def radians(x: float) -> float:
    return math.radians(x)


def factorial(x: float) -> float:
    _require(x >= 0, "argument must be >= 0")
    _require(x == int(x), "argument must be an integer")
    _require(x <= 170, "result is too large")
    return float(math.factorial(int(x)))


def minimum(values: Sequence[float]) -> float:
    return reduce(lambda acc, value: value if value < acc else acc, values)


def maximum(values: Sequence[float]) -> float:
    return reduce(lambda acc, value: value if value > acc else acc, values)
