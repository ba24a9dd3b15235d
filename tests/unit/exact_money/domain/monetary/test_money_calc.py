from decimal import Decimal, ROUND_DOWN, ROUND_HALF_EVEN

import pytest

from exact_money.domain.monetary.errors import (
    IncompatibleCurrencyError,
    IncompatibleLocaleError,
    InexactDivisionError,
    NoScaleSetError,
)
from exact_money.domain.monetary.money_calc import MoneyCalc
from exact_money.domain.monetary.money_locale import CANADA_FRENCH, MoneyLocale, US
from exact_money.domain.monetary.money_type import MoneyType
from exact_money.utils.decimal_tools import decimal_places
from tests.helpers.helper_money_type import create_gbp_type, create_usd_type

# Constants
USD_TYPE = create_usd_type()
GBP_TYPE = create_gbp_type()


# tests
def test_simple_calculations():
    assert USD_TYPE.money(80).calc().add(USD_TYPE.money(20)).money() == USD_TYPE.money(100)
    assert USD_TYPE.money(80).calc().subtract(USD_TYPE.money(20)).money() == USD_TYPE.money(60)
    assert USD_TYPE.money(80).calc().multiply(10).money() == USD_TYPE.money(800)
    assert USD_TYPE.money(80).calc().divide(10).money() == USD_TYPE.money(8)
    assert USD_TYPE.money(80).calc().max(USD_TYPE.money(20)).money() == USD_TYPE.money(80)
    assert USD_TYPE.money(80).calc().min(USD_TYPE.money(20)).money() == USD_TYPE.money(20)
    assert USD_TYPE.money(-80).calc().abs().money() == USD_TYPE.money(80)
    assert USD_TYPE.money(80).calc().negate().money() == USD_TYPE.money(-80)


def test_zero():
    calc = USD_TYPE.calc(3)
    assert calc.money().is_zero

    calc.add(USD_TYPE.money(1))
    assert not calc.money().is_zero

    calc.zero()
    assert calc.money().is_zero
    assert decimal_places(calc.money().amount) == 3
    assert calc.money_type is USD_TYPE


def test_array_calculations():
    assert USD_TYPE.calc().add(USD_TYPE.money(1), USD_TYPE.money(2), USD_TYPE.money(3)).money() == USD_TYPE.money(6)
    assert USD_TYPE.calc().subtract(USD_TYPE.money(6)).add(USD_TYPE.money(1), USD_TYPE.money(2), USD_TYPE.money(3)).money() == USD_TYPE.money(0)
    assert USD_TYPE.calc().subtract(USD_TYPE.money(1), USD_TYPE.money(2), USD_TYPE.money(3)).money() == USD_TYPE.money(-6)
    assert USD_TYPE.calc().add(USD_TYPE.money(6)).subtract(USD_TYPE.money(1), USD_TYPE.money(2), USD_TYPE.money(3)).money() == USD_TYPE.money(0)


def test_array_not_partially_applied():
    money = USD_TYPE.money(20)
    calc = money.calc()
    with pytest.raises(IncompatibleCurrencyError):
        calc.add(GBP_TYPE.money(10), GBP_TYPE.money(10))
    assert calc.money() == money

    canada = MoneyType(MoneyLocale.parse("_CA"), None)
    canada_french = MoneyType(CANADA_FRENCH, None)
    calc = canada.money(20).calc()
    with pytest.raises(IncompatibleLocaleError):
        calc.add(canada_french.money(10), GBP_TYPE.money(10))
    assert calc.money_type == canada
    assert calc.amount == Decimal("0.20")

    calc = USD_TYPE.money(20).calc(2)
    with pytest.raises(IncompatibleCurrencyError):
        calc.subtract(USD_TYPE.money(5), GBP_TYPE.money(5))
    assert calc.amount == Decimal("0.20")


def test_type_combining():
    unspecified_currency = MoneyType(US, None)
    us = MoneyType.for_locale(US)
    assert unspecified_currency.calc().add(us.calc().money()).money_type == us

    with pytest.raises(IncompatibleCurrencyError):
        us.calc().add(GBP_TYPE.calc().money())


def test_max_min_reject_incompatible_types_without_change():
    calc = USD_TYPE.money(50).calc(2)
    with pytest.raises(IncompatibleCurrencyError):
        calc.max(GBP_TYPE.money(100))
    with pytest.raises(IncompatibleCurrencyError):
        calc.min(GBP_TYPE.money(10))
    assert calc.money() == USD_TYPE.money(50)


def test_scaling():
    assert USD_TYPE.money(120).calc(0).money() == USD_TYPE.money(100)
    assert USD_TYPE.calc(0, ROUND_DOWN).add(USD_TYPE.money(50)).add(USD_TYPE.money(50)).money() == USD_TYPE.money()
    assert USD_TYPE.money(100).calc(2).divide(3).money() == USD_TYPE.money(33)
    assert USD_TYPE.money(11).calc(1).min(USD_TYPE.money(12)).money() == USD_TYPE.money(10)


def test_get_scale():
    assert USD_TYPE.calc().scale is None
    assert USD_TYPE.calc(0).scale == 0
    assert USD_TYPE.calc(1).scale == 1
    assert USD_TYPE.calc(-2).scale is None


def test_default_rounding():
    assert USD_TYPE.calc(2).rounding == MoneyCalc.DEFAULT_ROUNDING
    assert USD_TYPE.calc(2, None).rounding == MoneyCalc.DEFAULT_ROUNDING
    assert USD_TYPE.calc(2, ROUND_DOWN).rounding == ROUND_DOWN


def test_rejects_unknown_rounding():
    with pytest.raises(ValueError):
        USD_TYPE.calc(2, "HALF_UP")


def test_own_money_source():
    money_type = MoneyType()
    money = money_type.money(10)

    class FixedSource:
        def money(self):
            return money

    assert money_type.calc().add(FixedSource()).money() == money


def test_type_and_calc_are_money_sources():
    calc = USD_TYPE.money(250).calc(2)
    calc.add(USD_TYPE)
    assert calc.money() == USD_TYPE.money(250)

    other = USD_TYPE.money(50).calc()
    calc.add(other).subtract(other)
    assert calc.money() == USD_TYPE.money(250)


def test_rejects_non_source():
    with pytest.raises(TypeError):
        USD_TYPE.calc().add(Decimal(1))


@pytest.mark.parametrize("scale", [0, 1, 2, 3, 5])
def test_scale_discipline(scale):
    calc = USD_TYPE.money(12345).calc(scale)
    assert decimal_places(calc.amount) == scale

    calc.add(USD_TYPE.money("0.123456"))
    assert decimal_places(calc.amount) == scale
    calc.subtract(USD_TYPE.money("7.77777"))
    assert decimal_places(calc.amount) == scale
    calc.divide(7)
    assert decimal_places(calc.amount) == scale
    calc.multiply(3)
    assert decimal_places(calc.amount) == scale
    calc.max(USD_TYPE.money("-1000.98765"))
    assert decimal_places(calc.amount) == scale
    calc.min(USD_TYPE.money("1000.98765"))
    assert decimal_places(calc.amount) == scale
    calc.negate().abs()
    assert decimal_places(calc.amount) == scale
    calc.amount = "3.14159265"
    assert decimal_places(calc.amount) == scale


def test_multiply_by_fractional_factor_keeps_exact_product():
    calc = USD_TYPE.money(100).calc(2).multiply("0.333")
    assert calc.amount == Decimal("0.333")
    assert decimal_places(calc.amount) == 5


def test_multiply_by_integer_factor_rescales():
    calc = USD_TYPE.money(100).calc(2).multiply(Decimal("1E+1"))
    assert calc.amount == Decimal("10")
    assert decimal_places(calc.amount) == 2


def test_divide_rounds_at_scale():
    assert USD_TYPE.money(100).calc(2).divide(8).amount == Decimal("0.13")
    assert USD_TYPE.money(100).calc(2, ROUND_HALF_EVEN).divide(8).amount == Decimal("0.12")
    assert USD_TYPE.money(100).calc(2, ROUND_DOWN).divide(8).amount == Decimal("0.12")
    assert USD_TYPE.money(-100).calc(2).divide(8).amount == Decimal("-0.13")


def test_divide_without_scale_is_exact():
    assert USD_TYPE.money(100).calc().divide(8).amount == Decimal("0.125")
    assert USD_TYPE.money(100).calc().divide("0.03125").amount == Decimal(32)


def test_divide_without_scale_rejects_inexact_result():
    calc = USD_TYPE.money(100).calc()
    with pytest.raises(InexactDivisionError):
        calc.divide(3)
    assert calc.amount == Decimal("1.00")


def test_divide_by_zero():
    with pytest.raises(ZeroDivisionError):
        USD_TYPE.money(100).calc(2).divide(0)
    with pytest.raises(ZeroDivisionError):
        USD_TYPE.money(100).calc().divide(0)


def test_unscaled_calculation_is_arbitrary_precision():
    big = USD_TYPE.money("123456789012345678901234567890.123456789")
    calc = big.calc().multiply(big.amount)
    assert len(calc.amount.as_tuple().digits) > 70
    assert decimal_places(calc.amount) == 18

    calc.add(USD_TYPE.money("0.000000000000000000000000000001"))
    assert decimal_places(calc.amount) == 30
    assert calc.amount.as_tuple().digits[-1] == 1

    calc.subtract(USD_TYPE.money("0.000000000000000000000000000001")).divide(big.amount)
    assert calc.amount == big.amount


def test_amount_setter():
    calc = USD_TYPE.calc(2)
    calc.amount = "1.005"
    assert calc.amount == Decimal("1.01")

    with pytest.raises(ValueError):
        calc.amount = None


def test_money_type_setter():
    calc = USD_TYPE.calc()
    calc.money_type = GBP_TYPE
    assert calc.money().money_type is GBP_TYPE

    with pytest.raises(TypeError):
        calc.money_type = "GBP"


def test_money_snapshot_is_independent():
    calc = USD_TYPE.money(100).calc(2)
    snapshot = calc.money()
    calc.add(USD_TYPE.money(100))

    assert snapshot == USD_TYPE.money(100)
    assert calc.money() == USD_TYPE.money(200)


def test_clone_is_independent():
    calc = USD_TYPE.money(100).calc(2, ROUND_DOWN)
    clone = calc.clone()
    clone.add(USD_TYPE.money(1))

    assert clone.scale == 2 and clone.rounding == ROUND_DOWN
    assert calc.money() == USD_TYPE.money(100)
    assert clone.money() == USD_TYPE.money(101)


def test_calc_copies_current_value_with_new_scale():
    calc = USD_TYPE.money(155).calc(2)
    copy = calc.calc(1)
    assert copy.amount == Decimal("1.6")
    assert calc.calc().scale is None


def test_equality():
    calc = USD_TYPE.money(100).calc(2)
    assert calc == calc.clone()
    assert calc != calc.clone().zero()
    assert calc != USD_TYPE.money(100).calc(3)
    assert calc != USD_TYPE.money(100)


def test_splitter_requires_scale():
    with pytest.raises(NoScaleSetError, match="splitter"):
        USD_TYPE.money(100).calc().splitter()


def test_str_formats_current_value():
    assert str(USD_TYPE.money(12345).calc(2)) == "$123.45"


def test_constructor_validation():
    with pytest.raises(TypeError):
        MoneyCalc("USD", Decimal(0))
    with pytest.raises(ValueError):
        MoneyCalc(USD_TYPE, None)
    with pytest.raises(TypeError):
        MoneyCalc(USD_TYPE, Decimal(0), scale="2")
