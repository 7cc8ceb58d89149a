import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from scan_options.config import load_config
from scan_options.ScannerModels import (
    SaneConstraintType,
    SaneScannerOption,
    SaneType,
    SaneUnit,
    ScanRange,
    fix,
    format_number,
)

config = load_config()


class ScanOption(ABC):
    def __init__(self, name: str, index: int, *, title: str|None = None,
                 desc: str|None = None, unit: SaneUnit = SaneUnit.NONE):
        if index < 0:
            raise ValueError(f"option index must not be negative, got {index}")
        self._name = name
        self._index = index
        self._title = title
        self._desc = desc
        self._unit = SaneUnit(unit)

    @property
    def name(self) -> str:
        return self._name

    @property
    def index(self) -> int:
        return self._index

    @property
    def title(self) -> str|None:
        return self._title

    @property
    def desc(self) -> str|None:
        return self._desc

    @property
    def unit(self) -> SaneUnit:
        return self._unit

    @property
    @abstractmethod
    def value(self) -> Any: ...

    def _format_value(self, value, float_format: str) -> str:
        return format_number(value, float_format)

    def _describe_constraint(self, float_format: str) -> str:
        return ""

    def describe(self, float_format: str|None = None) -> str:
        if float_format is None:
            float_format = config.float_format
        text = f"{self.name} [{self.index}]: {self._format_value(self.value, float_format)}"
        if config.show_units and self.unit.suffix:
            text += f" {self.unit.suffix}"
        if constraint := self._describe_constraint(float_format):
            text += f" ({constraint})"
        return text

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, index={self.index}, value={self.value!r})"


class NumericScanOption(ScanOption):
    """Holds range and word list constraints by reference, never checks the value against them."""

    def __init__(self, name: str, index: int, **kwargs):
        super().__init__(name, index, **kwargs)
        self._range_constraint: ScanRange|None = None
        self._numeric_constraints: Sequence[int|float]|None = None

    @property
    def range_constraint(self) -> ScanRange|None:
        return self._range_constraint

    @range_constraint.setter
    def range_constraint(self, scan_range: ScanRange|None):
        self._range_constraint = scan_range

    @property
    def numeric_constraints(self) -> Sequence[int|float]|None:
        return self._numeric_constraints

    @numeric_constraints.setter
    def numeric_constraints(self, values: Sequence[int|float]|None):
        self._numeric_constraints = values

    def _describe_constraint(self, float_format: str) -> str:
        parts = []
        if self._range_constraint is not None:
            parts.append(f"range {self._range_constraint.describe(float_format)}")
        if self._numeric_constraints is not None:
            allowed = ", ".join(self._format_value(v, float_format) for v in self._numeric_constraints)
            parts.append(f"one of {allowed}")
        return "; ".join(parts)


class FixedScanOption(NumericScanOption):
    def __init__(self, fixed_value: int, name: str, index: int, **kwargs):
        super().__init__(name, index, **kwargs)
        self._fixed_value = int(fixed_value)
        self._double_value: float|None = None

    @property
    def fixed_value(self) -> int:
        return self._fixed_value

    @property
    def is_double(self) -> bool:
        return self._double_value is not None

    @property
    def value(self) -> int|float:
        if self._double_value is not None:
            return self._double_value
        return self._fixed_value

    def set_double_value(self, value: float):
        value = float(value)
        word = fix(value)
        self._double_value = value
        self._fixed_value = word
        logging.debug(f"{self.name}: set to {self._double_value} (fixed {self._fixed_value:#x})")


class IntScanOption(NumericScanOption):
    def __init__(self, value: int, name: str, index: int, **kwargs):
        super().__init__(name, index, **kwargs)
        self._value = int(value)

    @property
    def value(self) -> int:
        return self._value

    def set_value(self, value: int):
        self._value = int(value)
        logging.debug(f"{self.name}: set to {self._value}")


class BoolScanOption(ScanOption):
    def __init__(self, value: bool, name: str, index: int, **kwargs):
        super().__init__(name, index, **kwargs)
        self._value = bool(value)

    @property
    def value(self) -> bool:
        return self._value

    def set_value(self, value: bool):
        self._value = bool(value)
        logging.debug(f"{self.name}: set to {self._value}")


class StringScanOption(ScanOption):
    def __init__(self, value: str, name: str, index: int, **kwargs):
        super().__init__(name, index, **kwargs)
        self._value = value
        self._string_constraints: Sequence[str]|None = None

    @property
    def value(self) -> str:
        return self._value

    def set_value(self, value: str):
        self._value = value
        logging.debug(f"{self.name}: set to {self._value!r}")

    @property
    def string_constraints(self) -> Sequence[str]|None:
        return self._string_constraints

    @string_constraints.setter
    def string_constraints(self, values: Sequence[str]|None):
        self._string_constraints = values

    def _describe_constraint(self, float_format: str) -> str:
        if self._string_constraints is None:
            return ""
        return "one of " + ", ".join(self._string_constraints)


def option_from_descriptor(descriptor: SaneScannerOption, value) -> ScanOption:
    if descriptor.is_array or isinstance(value, (list, tuple)):
        raise ValueError(f"option {descriptor.name!r} holds an array, not a single value")
    kwargs = dict(title=descriptor.title, desc=descriptor.desc, unit=descriptor.unit)
    name = descriptor.name or ""
    option: ScanOption
    match descriptor.type:
        case SaneType.FIXED:
            # python-sane hands out FIXED values already converted to float
            option = FixedScanOption(fix(value), name, descriptor.index, **kwargs)
            option.set_double_value(value)
        case SaneType.INT:
            option = IntScanOption(value, name, descriptor.index, **kwargs)
        case SaneType.BOOL:
            option = BoolScanOption(value, name, descriptor.index, **kwargs)
        case SaneType.STRING:
            option = StringScanOption(value, name, descriptor.index, **kwargs)
        case _:
            raise ValueError(f"option {name!r} of type {descriptor.type.name} carries no value")

    match descriptor.constraint_type:
        case SaneConstraintType.RANGE if isinstance(option, NumericScanOption):
            option.range_constraint = ScanRange.from_tuple(descriptor.constraint)
        case SaneConstraintType.WORD_LIST if isinstance(option, NumericScanOption):
            option.numeric_constraints = descriptor.constraint
        case SaneConstraintType.STRING_LIST if isinstance(option, StringScanOption):
            option.string_constraints = descriptor.constraint
    return option


def build_options(descriptors: Iterable[SaneScannerOption], values: Mapping[str, Any]) -> list[ScanOption]:
    options = []
    for descriptor in descriptors:
        if descriptor.type in (SaneType.BUTTON, SaneType.GROUP):
            logging.debug(f"skipping {descriptor.type.name.lower()} {descriptor.title!r}")
            continue
        if descriptor.name not in values:
            logging.debug(f"no value for option {descriptor.name!r}, skipping")
            continue
        if descriptor.is_array or isinstance(values[descriptor.name], (list, tuple)):
            logging.debug(f"skipping array option {descriptor.name!r}")
            continue
        options.append(option_from_descriptor(descriptor, values[descriptor.name]))
    return options
