"""Load yearly tax configuration documents into validated bracket tables"""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field, ValidationError

from family_finance.domain.exceptions import ConfigurationError
from family_finance.domain.models import TaxBracket, TaxBracketTable, TaxConfiguration
from family_finance.utils.money import reais_to_cents

logger = logging.getLogger(__name__)


class BracketSchema(BaseModel):
    """One stored bracket row; values in reais, max_value 0 means unbounded"""

    min_value: Decimal = Field(..., ge=0)
    max_value: Decimal = Field(..., ge=0)
    rate: float = Field(..., ge=0, le=1, description="0.075 = 7.5%")
    deduction: Decimal = Field(Decimal(0), ge=0, description="Parcela a deduzir (IRPF only)")
    order: int
    is_active: bool = True


class TaxConfigurationSchema(BaseModel):
    """Stored tax configuration for one year"""

    year: int = Field(..., ge=1900)
    inss_deduction_per_dependent: Decimal = Field(..., ge=0)
    fgts_rate: float = Field(..., ge=0, le=1)
    inss_brackets: List[BracketSchema] = Field(..., min_length=1)
    irpf_brackets: List[BracketSchema] = Field(..., min_length=1)


def _to_table(rows: List[BracketSchema], name: str) -> TaxBracketTable:
    active = sorted((row for row in rows if row.is_active), key=lambda row: row.order)
    brackets = [
        TaxBracket(
            lower_cents=reais_to_cents(row.min_value),
            upper_cents=None if row.max_value == 0 else reais_to_cents(row.max_value),
            rate=row.rate,
            deduction_cents=reais_to_cents(row.deduction),
        )
        for row in active
    ]
    return TaxBracketTable(tuple(brackets), name=name)


def parse_tax_configuration(data: Dict[str, Any]) -> TaxConfiguration:
    """
    Build a TaxConfiguration from a stored document.

    Inactive rows are dropped and the rest ordered by their "order" field
    before the tables are validated.
    """
    try:
        schema = TaxConfigurationSchema.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid tax configuration: {e}") from e

    return TaxConfiguration(
        year=schema.year,
        inss_table=_to_table(schema.inss_brackets, f"INSS {schema.year}"),
        irpf_table=_to_table(schema.irpf_brackets, f"IRPF {schema.year}"),
        dependent_deduction_cents=reais_to_cents(schema.inss_deduction_per_dependent),
        welfare_fund_rate=schema.fgts_rate,
    )


def load_tax_configuration(path: Union[str, Path]) -> TaxConfiguration:
    """Read and validate a tax configuration JSON file"""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read tax configuration {path}: {e}") from e

    config = parse_tax_configuration(data)
    logger.info(
        "Tax configuration loaded",
        extra={
            "path": str(path),
            "year": config.year,
            "inss_brackets": len(config.inss_table),
            "irpf_brackets": len(config.irpf_table),
        },
    )
    return config
