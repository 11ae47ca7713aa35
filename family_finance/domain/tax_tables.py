"""Default 2025 INSS/IRPF tables, passed explicitly as a fallback"""

import logging
from typing import Optional

from family_finance.domain.models import TaxBracket, TaxBracketTable, TaxConfiguration

logger = logging.getLogger(__name__)


# INSS 2025: pure marginal bands. The 0% top band caps the contribution
# at the ceiling of R$ 7.786,02.
DEFAULT_INSS_TABLE_2025 = TaxBracketTable(
    (
        TaxBracket(0, 141_200, 0.075),
        TaxBracket(141_200, 266_668, 0.09),
        TaxBracket(266_668, 400_003, 0.12),
        TaxBracket(400_003, 778_602, 0.14),
        TaxBracket(778_602, None, 0.0),
    ),
    name="INSS 2025",
)

# IRPF 2025: rate and "parcela a deduzir" per band
DEFAULT_IRPF_TABLE_2025 = TaxBracketTable(
    (
        TaxBracket(0, 225_920, 0.0, 0),
        TaxBracket(225_920, 282_665, 0.075, 16_944),
        TaxBracket(282_665, 375_105, 0.15, 38_144),
        TaxBracket(375_105, 466_468, 0.225, 66_277),
        TaxBracket(466_468, None, 0.275, 89_600),
    ),
    name="IRPF 2025",
)

DEFAULT_DEPENDENT_DEDUCTION_CENTS = 18_959  # R$ 189,59 per dependent
DEFAULT_WELFARE_FUND_RATE = 0.08  # FGTS

DEFAULT_TAX_CONFIGURATION_2025 = TaxConfiguration(
    year=2025,
    inss_table=DEFAULT_INSS_TABLE_2025,
    irpf_table=DEFAULT_IRPF_TABLE_2025,
    dependent_deduction_cents=DEFAULT_DEPENDENT_DEDUCTION_CENTS,
    welfare_fund_rate=DEFAULT_WELFARE_FUND_RATE,
)


def resolve_tax_configuration(
    configured: Optional[TaxConfiguration],
    fallback: TaxConfiguration,
) -> TaxConfiguration:
    """
    Pick the configured tax parameters, or the caller's fallback when the
    configuration lookup produced nothing.
    """
    if configured is not None:
        return configured

    logger.warning(
        "Tax configuration unavailable, using fallback tables",
        extra={"fallback_year": fallback.year},
    )
    return fallback
