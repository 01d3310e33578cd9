"""API endpoints for the SimpleSwap ledger."""

import os
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field

from simpleswap.assets.faucet import Faucet
from simpleswap.assets.ledger import InMemoryAssetLedger
from simpleswap.clock import SystemClock
from simpleswap.config import EngineConfig
from simpleswap.engine.simple_swap import SimpleSwap
from simpleswap.models.api import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    PairInfo,
    PriceResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapRequest,
    SwapResponse,
)
from simpleswap.models.types import Address, Uint256

logger = structlog.get_logger()

router = APIRouter()

# Deployer of the demo assets and faucet (configurable via SIMPLESWAP_DEPLOYER)
DEPLOYER = os.environ.get("SIMPLESWAP_DEPLOYER", "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266")
TOKEN_A_ADDRESS = "0x0165878a594ca255338adfa4d48449f69242eb8f"
TOKEN_B_ADDRESS = "0xa513e6e4b8f2a923d98304ec87f64353c4d5c853"
FAUCET_ADDRESS = "0x2279b7a0a67db372996a5fab50d91eaa73d2ebe6"
FAUCET_SEED = 10_000 * 10**18

# Address-shaped path segment
PathAddress = Annotated[str, Path(pattern=r"^0x[a-fA-F0-9]{40}$")]


class ApproveRequest(BaseModel):
    """Body of POST /assets/{asset}/approve."""

    owner: Address
    spender: Address
    amount: Uint256


class FaucetRequest(BaseModel):
    """Body of POST /faucet/request."""

    caller: Address
    recipient: Address


class BalanceResponse(BaseModel):
    asset: Address
    account: Address
    balance: Uint256
    decimals: int = Field(ge=0, le=255)


def _create_default_engine() -> tuple[SimpleSwap, Faucet]:
    """Create the engine with two demo assets and a stocked faucet.

    The demo assets stand in for the deployed test tokens; the deployer
    mints them, seeds the faucet and can mint more.
    """
    clock = SystemClock()
    token_a = InMemoryAssetLedger(TOKEN_A_ADDRESS, "Token A", "TKA", owner=DEPLOYER)
    token_b = InMemoryAssetLedger(TOKEN_B_ADDRESS, "Token B", "TKB", owner=DEPLOYER)
    engine = SimpleSwap(config=EngineConfig.from_env(), clock=clock, assets=[token_a, token_b])

    faucet = Faucet(FAUCET_ADDRESS, DEPLOYER, token_a, token_b, clock)
    for token in (token_a, token_b):
        token.mint(DEPLOYER, DEPLOYER, 2 * FAUCET_SEED)
        token.approve(DEPLOYER, faucet.address, FAUCET_SEED)
    faucet.replenish(DEPLOYER, FAUCET_SEED, FAUCET_SEED)

    logger.info(
        "default_engine_created",
        engine=engine.address,
        fee_bps=engine.state.config.fee_bps,
        assets=[token_a.address, token_b.address],
    )
    return engine, faucet


_engine, _faucet = _create_default_engine()


def get_engine() -> SimpleSwap:
    """Dependency provider for the engine instance.

    Override this in tests to inject a fresh engine:
        app.dependency_overrides[get_engine] = lambda: engine
    """
    return _engine


def get_faucet() -> Faucet:
    """Dependency provider for the faucet instance."""
    return _faucet


@router.post("/liquidity/add", response_model=AddLiquidityResponse)
def add_liquidity(
    request: AddLiquidityRequest,
    engine: SimpleSwap = Depends(get_engine),
) -> AddLiquidityResponse:
    """Deposit both assets of a pair and mint shares."""
    amount_a, amount_b, liquidity = engine.add_liquidity(
        request.sender,
        request.token_a,
        request.token_b,
        int(request.amount_a_desired),
        int(request.amount_b_desired),
        int(request.amount_a_min),
        int(request.amount_b_min),
        request.to,
        request.deadline,
    )
    return AddLiquidityResponse(amount_a=amount_a, amount_b=amount_b, liquidity=liquidity)


@router.post("/liquidity/remove", response_model=RemoveLiquidityResponse)
def remove_liquidity(
    request: RemoveLiquidityRequest,
    engine: SimpleSwap = Depends(get_engine),
) -> RemoveLiquidityResponse:
    """Burn shares and withdraw the proportional reserves."""
    amount_a, amount_b = engine.remove_liquidity(
        request.sender,
        request.token_a,
        request.token_b,
        int(request.liquidity),
        int(request.amount_a_min),
        int(request.amount_b_min),
        request.to,
        request.deadline,
    )
    return RemoveLiquidityResponse(amount_a=amount_a, amount_b=amount_b)


@router.post("/swap", response_model=SwapResponse)
def swap(
    request: SwapRequest,
    engine: SimpleSwap = Depends(get_engine),
) -> SwapResponse:
    """Swap an exact input amount along a two-asset path."""
    amount_in = int(request.amount_in)
    amount_out = engine.swap_exact_tokens_for_tokens(
        request.sender,
        amount_in,
        int(request.amount_out_min),
        request.path,
        request.to,
        request.deadline,
    )
    return SwapResponse(amounts=[str(amount_in), str(amount_out)])


@router.get("/price/{token_in}/{token_out}", response_model=PriceResponse)
def get_price(
    token_in: PathAddress,
    token_out: PathAddress,
    engine: SimpleSwap = Depends(get_engine),
) -> PriceResponse:
    """Spot price of token_in in token_out units."""
    price = engine.get_price(token_in, token_out)
    return PriceResponse(
        token_in=token_in,
        token_out=token_out,
        price=price,
        scale=engine.state.config.price_scale,
    )


@router.get("/pairs", response_model=list[str])
def list_pairs(engine: SimpleSwap = Depends(get_engine)) -> list[str]:
    """Pair keys of every pool, in creation order."""
    return engine.all_pairs()


@router.get("/pairs/{token_a}/{token_b}", response_model=PairInfo)
def get_pair(
    token_a: PathAddress,
    token_b: PathAddress,
    engine: SimpleSwap = Depends(get_engine),
) -> PairInfo:
    """Identifiers and reserves of the pool for a pair."""
    pool = engine.pool(token_a, token_b)
    return PairInfo(
        pair_key=pool.pair_key,
        share_ledger=pool.share_ledger.address,
        token0=pool.asset0,
        token1=pool.asset1,
        reserve0=pool.reserve0,
        reserve1=pool.reserve1,
        total_supply=pool.total_supply,
    )


@router.get("/assets/{asset}/balance/{account}", response_model=BalanceResponse)
def get_balance(
    asset: PathAddress,
    account: PathAddress,
    engine: SimpleSwap = Depends(get_engine),
) -> BalanceResponse:
    ledger = engine.state.asset(asset)
    return BalanceResponse(
        asset=asset,
        account=account,
        balance=ledger.balance_of(account),
        decimals=ledger.decimals(),
    )


@router.post("/assets/{asset}/approve", status_code=204)
def approve(
    asset: PathAddress,
    request: ApproveRequest,
    engine: SimpleSwap = Depends(get_engine),
) -> None:
    """Set the spender's allowance over the owner's balance."""
    engine.state.asset(asset).approve(request.owner, request.spender, int(request.amount))


@router.post("/faucet/request", status_code=204)
def request_tokens(
    request: FaucetRequest,
    faucet: Faucet = Depends(get_faucet),
) -> None:
    """Dispense both demo assets to the recipient, once per cooldown."""
    faucet.request_tokens(request.caller, request.recipient)
