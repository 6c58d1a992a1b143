"""
Currency table and conversion.

Amounts are held in the ledger currency (BDT by default). Exchange rates
here are static samples with BDT as the base.
"""

from buildledger.models.base import ReferenceModel
from buildledger.models.records import CurrencySettings

DEFAULT_CURRENCY_CODE = "BDT"


class Currency(ReferenceModel):
    code: str
    symbol: str
    name: str
    name_bn: str
    locale: str
    flag: str
    decimal_places: int = 2


CURRENCIES: dict[str, Currency] = {
    c.code: c
    for c in (
        Currency(code="BDT", symbol="৳", name="Bangladeshi Taka", name_bn="বাংলাদেশী টাকা", locale="bn-BD", flag="🇧🇩", decimal_places=0),
        Currency(code="INR", symbol="₹", name="Indian Rupee", name_bn="ভারতীয় রুপি", locale="en-IN", flag="🇮🇳", decimal_places=0),
        Currency(code="USD", symbol="$", name="US Dollar", name_bn="মার্কিন ডলার", locale="en-US", flag="🇺🇸"),
        Currency(code="EUR", symbol="€", name="Euro", name_bn="ইউরো", locale="en-EU", flag="🇪🇺"),
        Currency(code="GBP", symbol="£", name="British Pound", name_bn="ব্রিটিশ পাউন্ড", locale="en-GB", flag="🇬🇧"),
        Currency(code="PKR", symbol="₨", name="Pakistani Rupee", name_bn="পাকিস্তানি রুপি", locale="en-PK", flag="🇵🇰", decimal_places=0),
        Currency(code="LKR", symbol="රු", name="Sri Lankan Rupee", name_bn="শ্রীলঙ্কান রুপি", locale="en-LK", flag="🇱🇰"),
        Currency(code="NPR", symbol="रू", name="Nepalese Rupee", name_bn="নেপালি রুপি", locale="en-NP", flag="🇳🇵"),
        Currency(code="MYR", symbol="RM", name="Malaysian Ringgit", name_bn="মালয়েশিয়ান রিংগিট", locale="en-MY", flag="🇲🇾"),
        Currency(code="SGD", symbol="S$", name="Singapore Dollar", name_bn="সিঙ্গাপুর ডলার", locale="en-SG", flag="🇸🇬"),
    )
}

# Units of each currency per 1 BDT.
EXCHANGE_RATES: dict[str, float] = {
    "BDT": 1,
    "INR": 0.75,
    "USD": 0.0083,
    "EUR": 0.0076,
    "GBP": 0.0065,
    "PKR": 2.35,
    "LKR": 2.75,
    "NPR": 1.20,
    "MYR": 0.039,
    "SGD": 0.011,
}

# Currencies printed with lakh/crore digit grouping (12,34,567).
LAKH_GROUPED_CURRENCIES = frozenset({"BDT", "INR", "PKR"})

DEFAULT_CURRENCY_SETTINGS = CurrencySettings(
    default_currency=DEFAULT_CURRENCY_CODE,
    display_currency=DEFAULT_CURRENCY_CODE,
    show_both_currencies=False,
    secondary_currency="USD",
)


def get_currency(code: str) -> Currency:
    """Look up a currency, falling back to BDT for unknown codes."""
    return CURRENCIES.get(code) or CURRENCIES[DEFAULT_CURRENCY_CODE]


def get_all_currencies() -> list[Currency]:
    return list(CURRENCIES.values())


def convert_currency(amount: float, from_code: str, to_code: str) -> float:
    """
    Convert through BDT using the static rate table.

    A code without a rate is treated as 1:1 with BDT. The result is
    rounded to the target currency's decimal places.
    """
    if from_code == to_code:
        return amount

    from_rate = EXCHANGE_RATES.get(from_code) or 1
    to_rate = EXCHANGE_RATES.get(to_code) or 1

    converted = amount / from_rate * to_rate
    return round(converted, get_currency(to_code).decimal_places)
