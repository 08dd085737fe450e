from typing import List, Mapping

import pandas as pd

from converter import engine

# Shown first in the selectors
POPULAR_CURRENCIES = [
    "USD",  # US Dollar
    "EUR",  # Euro
    "GBP",  # Pound Sterling
    "PKR",  # Pakistani Rupee
    "INR",  # Indian Rupee
    "AED",  # UAE Dirham
    "SAR",  # Saudi Riyal
    "CNY",  # Chinese Yuan
    "JPY",  # Japanese Yen
    "CAD",  # Canadian Dollar
]

def ordered_codes(codes) -> List[str]:
    """Popular codes (in POPULAR_CURRENCIES order) first, the rest alphabetically."""
    available = set(codes)
    popular = [c for c in POPULAR_CURRENCIES if c in available]
    rest = sorted(c for c in available if c not in POPULAR_CURRENCIES)
    return popular + rest

def rates_frame(table: Mapping[str, float], source: str, amount) -> pd.DataFrame:
    """
    One row per currency: rate per 1 `source` and the current amount converted.
    Empty frame when `source` is unknown.
    """
    cols = ["Currency", f"Per 1 {source}", "Converted"]
    if not table or source not in table:
        return pd.DataFrame(columns=cols)
    codes = ordered_codes(table.keys())
    df = pd.DataFrame({"Currency": codes})
    df[f"Per 1 {source}"] = [engine.cross_rate(source, c, table) for c in codes]
    df["Converted"] = [engine.convert(amount, source, c, table) for c in codes]
    return df.reset_index(drop=True)
