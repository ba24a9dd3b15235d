from __future__ import annotations

import logging
from decimal import ROUND_DOWN

from exact_money.domain.monetary.money_locale import US
from exact_money.domain.monetary.money_type import MoneyType


logger = logging.getLogger(__name__)


def run() -> None:
    # US dollars, formatted like "$1,234.56"
    usd = MoneyType.for_locale(US)

    # Sum up the bill from three dishes (amounts in cents)
    bill = usd.calc(2).add(usd.money(2350), usd.money(1875), usd.money(3199))

    # Add 8.875% tax and a 15% tip, rounded to cents at each step
    bill.add(bill.clone().multiply("0.08875").calc(2))
    bill.add(bill.clone().multiply("0.15").calc(2))
    logger.info(f"Total bill: {bill}")

    # Three guests share evenly; the first guest covers any leftover cent
    for index, share in enumerate(bill.clone().splitter().set_parts(3).split()):
        logger.info(f"Guest {index + 1} pays {share}")

    # The same bill split by what each guest ordered (proportions 2350 : 1875 : 3199)
    weighted = bill.calc(2, ROUND_DOWN).splitter().set_proportions(2350, 1875, 3199).split()
    for index, share in enumerate(weighted):
        logger.info(f"Guest {index + 1} pays {share} by consumption")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run()
