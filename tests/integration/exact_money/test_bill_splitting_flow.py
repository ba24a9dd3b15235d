import logging
from decimal import Decimal, ROUND_DOWN

from exact_money import Money, MoneyLocale, MoneyType
from examples.split_restaurant_bill import run

logger = logging.getLogger(__name__)


def _build_bill(usd: MoneyType):
    # Three dishes, in cents
    bill = usd.calc(2).add(usd.money(2350), usd.money(1875), usd.money(3199))

    # Tax and tip, each rounded to cents before being added
    bill.add(bill.clone().multiply("0.08875").calc(2))
    bill.add(bill.clone().multiply("0.15").calc(2))
    return bill


def test_bill_splitting_flow():
    usd = MoneyType.for_locale(MoneyLocale.parse("en_US"))
    bill = _build_bill(usd)
    assert bill.money() == usd.money(9295)
    assert str(bill) == "$92.95"

    # Even split; index 0 absorbs the residue
    shares = bill.clone().splitter().set_parts(3).split()
    logger.debug(f"Even shares: {shares}")
    assert [str(share) for share in shares] == ["$30.98", "$30.99", "$30.98"]
    assert usd.calc().add(*shares).money() == bill.money()

    # Split by consumption, rounding each share down
    weighted = bill.calc(2, ROUND_DOWN).splitter().set_proportions(2350, 1875, 3199).split()
    logger.debug(f"Weighted shares: {weighted}")
    assert [share.amount for share in weighted] == [Decimal("29.43"), Decimal("23.47"), Decimal("40.05")]
    assert usd.calc().add(*weighted).money() == bill.money()

    # The bill itself is untouched by splitting clones and copies
    assert bill.money() == usd.money(9295)


def test_mixed_types_settle_into_one_type():
    # A total without currency picks up the currency of the first priced item
    total = MoneyType(MoneyLocale.parse("_CA"), None).calc(2)
    total.add(MoneyType.for_currency("CAD").money(1999))
    total.add(MoneyType("fr_CA", None).money("5.01"))

    result: Money = total.money()
    assert result.money_type == MoneyType("fr_CA", "CAD")
    assert result.amount == Decimal("25.00")

    shares = result.calc(2).splitter().set_parts(4).split()
    assert all(share.money_type == result.money_type for share in shares)
    assert [share.amount for share in shares] == [Decimal("6.25")] * 4


def test_example_runs(caplog):
    with caplog.at_level(logging.INFO):
        run()
    assert "Total bill: $92.95" in caplog.text
