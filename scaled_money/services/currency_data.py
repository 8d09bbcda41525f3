"""Bundled currency metadata: code -> (name, base, exponent, symbol)."""

from typing import Dict, Optional, Tuple, Union

CurrencyRecord = Tuple[str, Union[int, Tuple[int, ...]], int, Optional[str]]


CURRENCY_DATA: Dict[str, CurrencyRecord] = {
    # Two decimal places
    "USD": ("US Dollar", 10, 2, "$"),
    "EUR": ("Euro", 10, 2, "€"),
    "GBP": ("Pound Sterling", 10, 2, "£"),
    "AUD": ("Australian Dollar", 10, 2, "A$"),
    "CAD": ("Canadian Dollar", 10, 2, "CA$"),
    "CHF": ("Swiss Franc", 10, 2, None),
    "CNY": ("Yuan Renminbi", 10, 2, "CN¥"),
    "INR": ("Indian Rupee", 10, 2, "₹"),
    "NZD": ("New Zealand Dollar", 10, 2, "NZ$"),
    "SGD": ("Singapore Dollar", 10, 2, None),
    "HKD": ("Hong Kong Dollar", 10, 2, "HK$"),
    "SEK": ("Swedish Krona", 10, 2, None),
    "NOK": ("Norwegian Krone", 10, 2, None),
    "DKK": ("Danish Krone", 10, 2, None),
    "PLN": ("Zloty", 10, 2, None),
    "CZK": ("Czech Koruna", 10, 2, None),
    "ZAR": ("Rand", 10, 2, None),
    "MXN": ("Mexican Peso", 10, 2, "MX$"),
    "BRL": ("Brazilian Real", 10, 2, "R$"),
    "ILS": ("New Israeli Sheqel", 10, 2, "₪"),
    "TRY": ("Turkish Lira", 10, 2, None),
    "MRU": ("Ouguiya", 5, 1, None),
    "MGA": ("Malagasy Ariary", 5, 1, None),
    # Zero decimal places
    "JPY": ("Yen", 10, 0, "¥"),
    "KRW": ("Won", 10, 0, "₩"),
    "VND": ("Dong", 10, 0, "₫"),
    "CLP": ("Chilean Peso", 10, 0, None),
    "ISK": ("Iceland Krona", 10, 0, None),
    "XAF": ("CFA Franc BEAC", 10, 0, "FCFA"),
    # Three decimal places
    "BHD": ("Bahraini Dinar", 10, 3, None),
    "KWD": ("Kuwaiti Dinar", 10, 3, None),
    "OMR": ("Rial Omani", 10, 3, None),
    "TND": ("Tunisian Dinar", 10, 3, None),
    "JOD": ("Jordanian Dinar", 10, 3, None),
    "IQD": ("Iraqi Dinar", 10, 3, None),
    "LYD": ("Libyan Dinar", 10, 3, None),
    # Four decimal places
    "CLF": ("Unidad de Fomento", 10, 4, None),
    "UYW": ("Unidad Previsional", 10, 4, None),
}
