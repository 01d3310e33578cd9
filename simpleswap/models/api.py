"""Pydantic models for the HTTP request/response bodies.

Field names mirror the router-style call surface the web client used
(camelCase on the wire, snake_case in Python). Amounts are uint256 decimal
strings so they survive JSON without precision loss.
"""

from pydantic import BaseModel, Field

from simpleswap.models.types import Address, Uint256


class AddLiquidityRequest(BaseModel):
    """Body of POST /liquidity/add."""

    sender: Address = Field(description="Account the assets are pulled from.")
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    amount_a_desired: Uint256 = Field(alias="amountADesired")
    amount_b_desired: Uint256 = Field(alias="amountBDesired")
    amount_a_min: Uint256 = Field(alias="amountAMin")
    amount_b_min: Uint256 = Field(alias="amountBMin")
    to: Address = Field(description="Recipient of the minted shares.")
    deadline: int = Field(ge=0, description="Unix timestamp (seconds).")

    model_config = {"populate_by_name": True}


class AddLiquidityResponse(BaseModel):
    """Accepted amounts and shares minted by an add-liquidity call."""

    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")
    liquidity: Uint256

    model_config = {"populate_by_name": True}


class RemoveLiquidityRequest(BaseModel):
    """Body of POST /liquidity/remove."""

    sender: Address = Field(description="Account whose shares are burned.")
    token_a: Address = Field(alias="tokenA")
    token_b: Address = Field(alias="tokenB")
    liquidity: Uint256
    amount_a_min: Uint256 = Field(alias="amountAMin")
    amount_b_min: Uint256 = Field(alias="amountBMin")
    to: Address = Field(description="Recipient of the withdrawn assets.")
    deadline: int = Field(ge=0)

    model_config = {"populate_by_name": True}


class RemoveLiquidityResponse(BaseModel):
    """Assets paid out by a remove-liquidity call."""

    amount_a: Uint256 = Field(alias="amountA")
    amount_b: Uint256 = Field(alias="amountB")

    model_config = {"populate_by_name": True}


class SwapRequest(BaseModel):
    """Body of POST /swap (exact input)."""

    sender: Address
    amount_in: Uint256 = Field(alias="amountIn")
    amount_out_min: Uint256 = Field(alias="amountOutMin")
    path: list[Address] = Field(description="[assetIn, assetOut]; any other length is rejected.")
    to: Address
    deadline: int = Field(ge=0)

    model_config = {"populate_by_name": True}


class SwapResponse(BaseModel):
    """Realized amounts of an exact-input swap."""

    amounts: list[Uint256] = Field(description="[amountIn, amountOut]")


class PriceResponse(BaseModel):
    """Spot price of asset_in denominated in asset_out."""

    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    price: Uint256 = Field(description="reserveOut * scale / reserveIn")
    scale: Uint256

    model_config = {"populate_by_name": True}


class PairInfo(BaseModel):
    """Identifiers and reserves of one pool."""

    pair_key: str = Field(alias="pairKey")
    share_ledger: Address = Field(alias="shareLedger")
    token0: Address
    token1: Address
    reserve0: Uint256
    reserve1: Uint256
    total_supply: Uint256 = Field(alias="totalSupply")

    model_config = {"populate_by_name": True}


class ErrorResponse(BaseModel):
    """Body returned for any ledger failure."""

    error: str = Field(description="Failure kind, e.g. 'Slippage'.")
    detail: str
