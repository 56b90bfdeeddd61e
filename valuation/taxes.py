"""Regional tax policy lookup."""

from __future__ import annotations

from valuation.config import TAX_RATES, TaxRates
from valuation.errors import UnsupportedRegionError


def tax_rates(region: str) -> TaxRates:
    """Return withholding and dividend tax rates for a region.

    Raises:
        UnsupportedRegionError: If the region has no tax table entry.
    """
    try:
        return TAX_RATES[region]
    except KeyError:
        raise UnsupportedRegionError(
            f"Region {region!r} not supported for tax calculation"
        ) from None
