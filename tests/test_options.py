"""Tests for the sibling option types and the descriptor factories."""

import logging

import pytest

from scan_options.options import (
    BoolScanOption,
    FixedScanOption,
    IntScanOption,
    ScanOption,
    StringScanOption,
    build_options,
    option_from_descriptor,
)
from scan_options.ScannerModels import SaneScannerOption, SaneType, SaneUnit, fix


def descriptor(index, name, type_, unit=SaneUnit.NONE, constraint=None, title=None, size=4):
    return SaneScannerOption(
        index=index,
        name=name,
        title=title or name.title(),
        desc=None,
        type=type_,
        unit=unit,
        size=size,
        cap=5,
        constraint=constraint,
    )


class TestSiblingOptions:
    def test_base_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            ScanOption("x", 0)  # type: ignore[abstract]

    def test_int_option(self) -> None:
        option = IntScanOption(300, "resolution", 1, unit=SaneUnit.DPI)
        option.set_value(600)
        assert option.value == 600
        option.numeric_constraints = [300, 600]
        assert option.describe() == "resolution [1]: 600 dpi (one of 300, 600)"

    def test_bool_option(self) -> None:
        option = BoolScanOption(0, "preview", 4)
        assert option.value is False
        option.set_value(1)
        assert option.value is True
        assert option.describe() == "preview [4]: True"

    def test_string_option(self) -> None:
        option = StringScanOption("Gray", "mode", 2)
        modes = ["Color", "Gray"]
        option.string_constraints = modes
        assert option.string_constraints is modes
        option.set_value("Color")
        assert option.describe() == "mode [2]: Color (one of Color, Gray)"


class TestOptionFromDescriptor:
    def test_fixed_becomes_double(self) -> None:
        option = option_from_descriptor(
            descriptor(8, "br-x", SaneType.FIXED, SaneUnit.MM, (0.0, 215.9, 0.0)), 215.9
        )
        assert isinstance(option, FixedScanOption)
        assert option.is_double
        assert option.value == 215.9
        assert option.fixed_value == fix(215.9)
        assert option.unit is SaneUnit.MM
        assert option.range_constraint is not None
        assert option.range_constraint.max == 215.9

    def test_int_with_word_list(self) -> None:
        option = option_from_descriptor(
            descriptor(1, "resolution", SaneType.INT, SaneUnit.DPI, [75, 150, 300]), 150
        )
        assert isinstance(option, IntScanOption)
        assert option.numeric_constraints == [75, 150, 300]
        assert option.range_constraint is None

    def test_string_with_list(self) -> None:
        option = option_from_descriptor(
            descriptor(2, "source", SaneType.STRING, constraint=["Flatbed", "ADF"]), "ADF"
        )
        assert isinstance(option, StringScanOption)
        assert option.string_constraints == ["Flatbed", "ADF"]

    def test_carries_title(self) -> None:
        option = option_from_descriptor(
            descriptor(3, "preview", SaneType.BOOL, title="Preview"), True
        )
        assert isinstance(option, BoolScanOption)
        assert option.title == "Preview"

    def test_array_raises(self) -> None:
        with pytest.raises(ValueError, match="array"):
            option_from_descriptor(descriptor(4, "gamma-table", SaneType.INT, size=1024), [0, 1, 2, 3])

    @pytest.mark.parametrize("type_", [SaneType.BUTTON, SaneType.GROUP])
    def test_valueless_types_raise(self, type_) -> None:
        with pytest.raises(ValueError, match="carries no value"):
            option_from_descriptor(descriptor(0, "calibrate", type_), None)


class TestBuildOptions:
    def test_skips_groups_and_missing_values(self, caplog) -> None:
        descriptors = [
            descriptor(0, "standard", SaneType.GROUP),
            descriptor(1, "resolution", SaneType.INT, SaneUnit.DPI, (50, 600, 1)),
            descriptor(2, "mode", SaneType.STRING, constraint=["Color", "Gray"]),
            descriptor(3, "tl-x", SaneType.FIXED, SaneUnit.MM, (0.0, 215.9, 0.0)),
        ]
        with caplog.at_level(logging.DEBUG):
            options = build_options(descriptors, {"resolution": 300, "tl-x": 0.0})
        assert [o.name for o in options] == ["resolution", "tl-x"]
        assert [o.index for o in options] == [1, 3]
        assert "no value for option 'mode'" in caplog.text

    def test_empty(self) -> None:
        assert build_options([], {}) == []

    def test_skips_array_options(self, caplog) -> None:
        descriptors = [
            descriptor(1, "gamma-table", SaneType.INT, constraint=(0, 255, 0), size=1024),
            descriptor(2, "resolution", SaneType.INT, SaneUnit.DPI, [75, 150, 300]),
        ]
        with caplog.at_level(logging.DEBUG):
            options = build_options(descriptors, {"gamma-table": [0, 1, 2, 3], "resolution": 150})
        assert [o.name for o in options] == ["resolution"]
        assert "skipping array option 'gamma-table'" in caplog.text
