import math
from enum import IntEnum
from numbers import Real

from pydantic import BaseModel, NonNegativeInt, Field

SANE_FIXED_SCALE_SHIFT = 16
SANE_WORD_SIZE = 4
SANE_WORD_MIN = -(1 << 31)
SANE_WORD_MAX = (1 << 31) - 1


def fix(value: float) -> int:
    scaled = value * (1 << SANE_FIXED_SCALE_SHIFT)
    if math.isnan(scaled):
        return 0
    # SANE_Fixed is a signed 32 bit word
    if scaled >= SANE_WORD_MAX:
        return SANE_WORD_MAX
    if scaled <= SANE_WORD_MIN:
        return SANE_WORD_MIN
    return int(scaled)


def unfix(word: int) -> float:
    return word / (1 << SANE_FIXED_SCALE_SHIFT)


def format_number(value, float_format: str = "") -> str:
    if isinstance(value, float):
        return f"{value:{float_format}}"
    return str(value)


class SaneType(IntEnum):
    BOOL = 0
    INT = 1
    FIXED = 2
    STRING = 3
    BUTTON = 4
    GROUP = 5


class SaneUnit(IntEnum):
    NONE = 0
    PIXEL = 1
    BIT = 2
    MM = 3
    DPI = 4
    PERCENT = 5
    MICROSECOND = 6

    @property
    def suffix(self) -> str:
        return _UNIT_SUFFIXES[self]


_UNIT_SUFFIXES = {
    SaneUnit.NONE: "",
    SaneUnit.PIXEL: "px",
    SaneUnit.BIT: "bit",
    SaneUnit.MM: "mm",
    SaneUnit.DPI: "dpi",
    SaneUnit.PERCENT: "%",
    SaneUnit.MICROSECOND: "us",
}


class SaneConstraintType(IntEnum):
    NONE = 0
    RANGE = 1
    WORD_LIST = 2
    STRING_LIST = 3


class ScanRange(BaseModel):
    min: int|float
    max: int|float
    # 0 means any value between min and max
    quant: int|float = Field(default=0)

    @classmethod
    def from_tuple(cls, constraint) -> "ScanRange":
        if len(constraint) != 3:
            raise ValueError(f"range constraint needs (min, max, quant), got {constraint!r}")
        min_, max_, quant = constraint
        return cls(min=min_, max=max_, quant=quant)

    def __contains__(self, value) -> bool:
        if not isinstance(value, Real) or not self.min <= value <= self.max:
            return False
        if not self.quant:
            return True
        steps = (value - self.min) / self.quant
        return abs(steps - round(steps)) < 1e-9

    def describe(self, fmt: str = "") -> str:
        text = f"{format_number(self.min, fmt)}..{format_number(self.max, fmt)}"
        if self.quant:
            text += f" step {format_number(self.quant, fmt)}"
        return text


class SaneScannerOption(BaseModel):
    index: NonNegativeInt
    name: str|None
    title: str
    desc: str|None
    type: SaneType
    unit: SaneUnit
    size: NonNegativeInt
    cap: NonNegativeInt
    constraint: None|tuple[int|float, int|float, int|float]|list[int]|list[float]|list[str]

    @classmethod
    def from_sane_tuple(cls, option) -> "SaneScannerOption":
        idx, name, title, desc, type_, unit, size, cap, constraint = option
        return cls(
            index=idx,
            name=name,
            title=title,
            desc=desc,
            type=type_,
            unit=unit,
            size=size,
            cap=cap,
            constraint=constraint,
        )

    @property
    def is_array(self) -> bool:
        # size is in bytes, word options larger than one word are vectors
        return self.type in (SaneType.BOOL, SaneType.INT, SaneType.FIXED) and self.size > SANE_WORD_SIZE

    @property
    def constraint_type(self) -> SaneConstraintType:
        if self.constraint is None:
            return SaneConstraintType.NONE
        if isinstance(self.constraint, tuple):
            return SaneConstraintType.RANGE
        if self.type == SaneType.STRING:
            return SaneConstraintType.STRING_LIST
        return SaneConstraintType.WORD_LIST
