"""Currency descriptor - identity plus numeric properties."""

from typing import TYPE_CHECKING, Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from scaled_money.core.arithmetic import compute_base

if TYPE_CHECKING:
    from scaled_money.services.currency_registry import CurrencyRegistry


class Currency(BaseModel):
    """
    Immutable currency descriptor.

    Attributes:
        code: Stable identifier (e.g. "USD")
        name: Display name
        base: Single radix, or per-level radixes for multi-base currencies
              (most significant level first)
        exponent: Default and minimum scale for values of this currency
        symbol: Optional display symbol
    """

    code: str = Field(..., min_length=1, description="Currency code")
    name: str = Field("", description="Display name")
    base: Union[int, Tuple[int, ...]] = Field(10, description="Radix or per-level radixes")
    exponent: int = Field(2, ge=0, description="Default number of subunit digits")
    symbol: Optional[str] = Field(None, description="Display symbol")

    model_config = ConfigDict(frozen=True)

    @field_validator("code")
    @classmethod
    def validate_code(cls, v: str) -> str:
        code = v.strip().upper()
        if not code:
            raise ValueError("Currency code cannot be blank")
        return code

    @field_validator("base")
    @classmethod
    def validate_base(cls, v: Union[int, Tuple[int, ...]]) -> Union[int, Tuple[int, ...]]:
        levels = (v,) if isinstance(v, int) else v
        if not levels:
            raise ValueError("Multi-base currency needs at least one level")
        if any(level < 2 for level in levels):
            raise ValueError(f"Every base must be >= 2, got {v}")
        return v

    @model_validator(mode="before")
    @classmethod
    def default_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("name"):
            data = {**data, "name": str(data.get("code", "")).strip().upper()}
        return data

    @classmethod
    def from_code(cls, code: str, registry: Optional["CurrencyRegistry"] = None) -> "Currency":
        """Resolve a code through the metadata registry (default one if not given)."""
        if registry is None:
            from scaled_money.services.currency_registry import currency_registry

            registry = currency_registry
        return registry.resolve(code)

    @property
    def effective_base(self) -> int:
        """All levels of the base multiplied together."""
        return compute_base(self.base)

    @property
    def is_multi_base(self) -> bool:
        return not isinstance(self.base, int)

    @property
    def levels(self) -> Tuple[int, ...]:
        return (self.base,) if isinstance(self.base, int) else tuple(self.base)

    @property
    def is_decimal(self) -> bool:
        """Base ten representable: single level and a multiple of ten."""
        return not self.is_multi_base and self.effective_base % 10 == 0

    def is_compatible_with(self, other: "Currency") -> bool:
        """Same code, same effective base and same exponent."""
        return (
            self.code == other.code
            and self.effective_base == other.effective_base
            and self.exponent == other.exponent
        )

    def __str__(self) -> str:
        return self.code
