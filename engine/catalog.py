"""Fixed table of named functions and the aliases that resolve to them."""
from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Tuple

from engine import functions


class FunctionId(Enum):
    SINE = "sin"
    COSINE = "cos"
    TANGENT = "tan"
    COTANGENT = "cot"
    ARCSINE = "arcsin"
    ARCCOSINE = "arccos"
    ARCTANGENT = "arctan"
    ARCCOTANGENT = "arccot"
    HYPERBOLIC_SINE = "sinh"
    HYPERBOLIC_COSINE = "cosh"
    HYPERBOLIC_TANGENT = "tanh"
    HYPERBOLIC_COTANGENT = "coth"
    AREA_SINE = "arsinh"
    AREA_COSINE = "arcosh"
    AREA_TANGENT = "artanh"
    AREA_COTANGENT = "arcoth"
    FLOOR = "floor"
    CEILING = "ceil"
    ROUND = "round"
    TRUNCATE = "trunc"
    ABSOLUTE = "abs"
    EXPONENT = "exp"
    NATURAL_LOG = "ln"
    DECIMAL_LOG = "lg"
    BINARY_LOG = "lb"
    LOGARITHM = "log"
    SQUARE_ROOT = "sqrt"
    CUBE_ROOT = "cbrt"
    SIGN = "sign"
    DEGREES = "deg"
    RADIANS = "rad"
    FACTORIAL = "fact"
    MINIMUM = "min"
    MAXIMUM = "max"


class Arity(Enum):
    ONE = 1
    TWO = 2
    VARIADIC = -1

    def accepts(self, count: int) -> bool:
        if self is Arity.VARIADIC:
            return count >= 1
        return count == self.value

    def describe(self) -> str:
        if self is Arity.VARIADIC:
            return "at least 1 argument"
        if self is Arity.ONE:
            return "1 argument"
        return f"{self.value} arguments"


@dataclass(slots=True, frozen=True)
class FunctionSpec:
    id: FunctionId
    aliases: Tuple[str, ...]
    arity: Arity
    rule: Callable[..., float]

    @property
    def name(self) -> str:
        return self.id.value


_SPECS: Tuple[FunctionSpec, ...] = (
    FunctionSpec(FunctionId.SINE, ("sin", "sine"), Arity.ONE, functions.sine),
    FunctionSpec(FunctionId.COSINE, ("cos", "cosine"), Arity.ONE, functions.cosine),
    FunctionSpec(FunctionId.TANGENT, ("tg", "tan"), Arity.ONE, functions.tangent),
    FunctionSpec(FunctionId.COTANGENT, ("ctg", "cot", "cotan"), Arity.ONE, functions.cotangent),
    FunctionSpec(FunctionId.ARCSINE, ("asin", "arcsin"), Arity.ONE, functions.arcsine),
    FunctionSpec(FunctionId.ARCCOSINE, ("acos", "arccos"), Arity.ONE, functions.arccosine),
    FunctionSpec(FunctionId.ARCTANGENT, ("atan", "arctg", "arctan"), Arity.ONE, functions.arctangent),
    FunctionSpec(FunctionId.ARCCOTANGENT, ("acot", "arcctg", "arccot"), Arity.ONE, functions.arccotangent),
    FunctionSpec(FunctionId.HYPERBOLIC_SINE, ("sh", "sinh"), Arity.ONE, functions.hyperbolic_sine),
    FunctionSpec(FunctionId.HYPERBOLIC_COSINE, ("ch", "cosh"), Arity.ONE, functions.hyperbolic_cosine),
    FunctionSpec(FunctionId.HYPERBOLIC_TANGENT, ("th", "tanh"), Arity.ONE, functions.hyperbolic_tangent),
    FunctionSpec(FunctionId.HYPERBOLIC_COTANGENT, ("cth", "coth"), Arity.ONE, functions.hyperbolic_cotangent),
    FunctionSpec(FunctionId.AREA_SINE, ("asinh", "arsh", "arsinh"), Arity.ONE, functions.area_sine),
    FunctionSpec(FunctionId.AREA_COSINE, ("acosh", "arch", "arcosh"), Arity.ONE, functions.area_cosine),
    FunctionSpec(FunctionId.AREA_TANGENT, ("atanh", "arth", "artanh"), Arity.ONE, functions.area_tangent),
    FunctionSpec(FunctionId.AREA_COTANGENT, ("acoth", "arcth", "arcoth"), Arity.ONE, functions.area_cotangent),
    FunctionSpec(FunctionId.FLOOR, ("floor",), Arity.ONE, functions.floor),
    FunctionSpec(FunctionId.CEILING, ("ceil", "ceiling"), Arity.ONE, functions.ceiling),
    FunctionSpec(FunctionId.ROUND, ("round",), Arity.ONE, functions.round_half_away),
    FunctionSpec(FunctionId.TRUNCATE, ("trunc", "truncate"), Arity.ONE, functions.truncate),
    FunctionSpec(FunctionId.ABSOLUTE, ("abs",), Arity.ONE, functions.absolute),
    FunctionSpec(FunctionId.EXPONENT, ("exp",), Arity.ONE, functions.exponent),
    FunctionSpec(FunctionId.NATURAL_LOG, ("ln",), Arity.ONE, functions.natural_log),
    FunctionSpec(FunctionId.DECIMAL_LOG, ("lg",), Arity.ONE, functions.decimal_log),
    FunctionSpec(FunctionId.BINARY_LOG, ("lb", "ld"), Arity.ONE, functions.binary_log),
    FunctionSpec(FunctionId.LOGARITHM, ("log", "logb"), Arity.TWO, functions.logarithm),
    FunctionSpec(FunctionId.SQUARE_ROOT, ("sqrt", "root"), Arity.ONE, functions.square_root),
    FunctionSpec(FunctionId.CUBE_ROOT, ("cbrt",), Arity.ONE, functions.cube_root),
    FunctionSpec(FunctionId.SIGN, ("sign", "sgn"), Arity.ONE, functions.sign),
    FunctionSpec(FunctionId.DEGREES, ("deg", "degrees"), Arity.ONE, functions.degrees),
    FunctionSpec(FunctionId.RADIANS, ("rad", "radians"), Arity.ONE, functions.radians),
    FunctionSpec(FunctionId.FACTORIAL, ("fact", "factorial"), Arity.ONE, functions.factorial),
    FunctionSpec(FunctionId.MINIMUM, ("min", "minimum"), Arity.VARIADIC, functions.minimum),
    FunctionSpec(FunctionId.MAXIMUM, ("max", "maximum"), Arity.VARIADIC, functions.maximum),
)

_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def fold(name: str) -> str:
    """ASCII-only lowercase; locale and non-ASCII letters are left alone."""
    return name.translate(_FOLD)


def _build_alias_table(specs: Tuple[FunctionSpec, ...]) -> Mapping[str, FunctionId]:
    table: Dict[str, FunctionId] = {}
    for spec in specs:
        for alias in spec.aliases:
            key = fold(alias)
            if key in table:
                raise ValueError(f"Alias {alias!r} registered twice")
            if not key.isalpha() or not key.isascii():
                raise ValueError(f"Alias {alias!r} must be ASCII letters only")
            table[key] = spec.id
    return MappingProxyType(table)


class FunctionCatalog:
    """
    Read-only lookup from alias to canonical function.

    Built once at import time and shared; nothing mutates it afterwards, so
    concurrent evaluations can read it without locking.
    """

    def __init__(self, specs: Tuple[FunctionSpec, ...] = _SPECS) -> None:
        self._specs: Mapping[FunctionId, FunctionSpec] = MappingProxyType({spec.id: spec for spec in specs})
        self._aliases = _build_alias_table(specs)

    def resolve(self, name: str) -> FunctionId | None:
        return self._aliases.get(fold(name))

    def spec(self, function_id: FunctionId) -> FunctionSpec:
        return self._specs[function_id]

    def lookup(self, name: str) -> FunctionSpec | None:
        function_id = self.resolve(name)
        return None if function_id is None else self._specs[function_id]

    def aliases_of(self, function_id: FunctionId) -> Tuple[str, ...]:
        return self._specs[function_id].aliases

    def names(self) -> List[str]:
        return sorted(self._aliases)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.resolve(name) is not None

    def __iter__(self):
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)


CATALOG = FunctionCatalog()


def resolve(name: str) -> FunctionId | None:
    return CATALOG.resolve(name)
