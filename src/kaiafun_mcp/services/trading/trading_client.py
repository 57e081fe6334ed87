# -*- coding: utf-8 -*-
"""Trading client: buy, sell and list KaiaFun tokens under one signing identity.

Each mutating operation is one sequential pipeline:
preconditions -> (metadata POST) -> submit one contract call -> wait for the
receipt -> decode the expected event. No retries are performed here.
"""

from __future__ import annotations

import asyncio
import json
import time
import structlog
from typing import TYPE_CHECKING, Any, Callable, Optional

from structlog.contextvars import bound_contextvars
from web3 import Web3
from web3.types import TxReceipt

from kaiafun_mcp.chain import KAIA_MAINNET, ChainDescriptor, abi, get_event_from_receipt
from kaiafun_mcp.exceptions import (
    InsufficientBalanceError,
    InvalidInputError,
    MissingRequiredConfigError,
    TransactionFailedError,
    UnsupportedChainError,
)
from kaiafun_mcp.services.trading.dto import (
    BuyRequest,
    ListResult,
    SellRequest,
    TokenBalance,
    TokenInfo,
    TokenMetadata,
    TradeResult,
)
from kaiafun_mcp.utils import is_hex_address, mask_address

if TYPE_CHECKING:
    from kaiafun_mcp.clients import AsyncChainClient, KaiaFunApiClient
    from kaiafun_mcp.config import Settings

# 10 KAIA in wei.
LISTING_FEE_WEI = 10 * 10**18


def _required_address(value: Optional[str], setting: str) -> str:
    if not value or not is_hex_address(value):
        raise MissingRequiredConfigError(setting)
    return Web3.to_checksum_address(value)


class TradingClient:
    """Translates trade intents into signed KaiaFun contract calls and decodes their results."""

    def __init__(
        self,
        settings: "Settings",
        chain_client: "AsyncChainClient",
        api_client: "KaiaFunApiClient",
        *,
        expected_chain: ChainDescriptor = KAIA_MAINNET,
        clock: Callable[[], float] = time.time,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Application settings (contract addresses).
            chain_client: Chain connection bound to one chain id, owning the signer.
            api_client: KaiaFun API client for metadata and uploads.
            expected_chain: Network every mutating operation must run against.
            clock: Time source in seconds (metadata timestamp).
            get_logger: Logger factory (injected).
            logger_name: Optional logger name (defaults to class name).

        Raises:
            MissingRequiredConfigError: If CHAIN__CORE_ADDRESS or CHAIN__BASE_TOKEN_ADDRESS is unset.
        """
        self._chain_client = chain_client
        self._api = api_client
        self._expected_chain = expected_chain
        self._clock = clock
        self._core_address = _required_address(settings.chain.core_address, "CHAIN__CORE_ADDRESS")
        self._base_token_address = _required_address(
            settings.chain.base_token_address, "CHAIN__BASE_TOKEN_ADDRESS"
        )
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def wallet_address(self) -> str:
        return self._chain_client.address

    @property
    def chain(self) -> ChainDescriptor:
        return self._chain_client.chain

    # --- Preconditions ---

    def _ensure_supported_chain(self) -> None:
        actual = self._chain_client.chain.id
        if actual != self._expected_chain.id:
            self._logger.warning(
                "trading_unsupported_chain",
                expected_chain_id=self._expected_chain.id,
                actual_chain_id=actual,
            )
            raise UnsupportedChainError(self._expected_chain.id, actual)

    async def _confirm(self, tx_hash: str) -> TxReceipt:
        receipt = await self._chain_client.wait_for_receipt(tx_hash)
        if receipt.get("status") == 0:
            raise TransactionFailedError(f"Transaction reverted: {tx_hash}", tx_hash=tx_hash)
        return receipt

    # --- Trading ---

    async def buy(self, request: BuyRequest) -> TradeResult:
        """Buy a token with native currency attached as value.

        Raises:
            InvalidInputError: Malformed address or non-positive amount.
            UnsupportedChainError: Connection bound to another chain; nothing is sent.
            TransactionFailedError: Submission, inclusion wait or revert.
        """
        request.validate()
        self._ensure_supported_chain()
        token = Web3.to_checksum_address(request.token_address)

        with bound_contextvars(operation="buy", token_masked=mask_address(token)):
            tx_hash = await self._chain_client.submit_transaction(
                self._core_address,
                abi.BUY_WITH_ETH,
                [token, request.min_token_amount],
                value=request.amount,
            )
            receipt = await self._confirm(tx_hash)
            trade_event = get_event_from_receipt(receipt, [abi.TRADE_EVENT], abi.TRADE_EVENT["name"])
            self._logger.info(
                "buy_confirmed",
                tx_hash=tx_hash,
                amount_wei=request.amount,
                trade_event_found=trade_event is not None,
            )
            return TradeResult(receipt=receipt, trade_event=trade_event)

    async def sell(self, request: SellRequest) -> TradeResult:
        """Sell a token for native currency (or the wrapped token when is_output_kaia is False).

        Raises:
            InvalidInputError: Malformed address or non-positive amount.
            UnsupportedChainError: Connection bound to another chain; nothing is sent.
            TransactionFailedError: Submission, inclusion wait or revert.
        """
        request.validate()
        self._ensure_supported_chain()
        token = Web3.to_checksum_address(request.token_address)

        with bound_contextvars(operation="sell", token_masked=mask_address(token)):
            tx_hash = await self._chain_client.submit_transaction(
                self._core_address,
                abi.SELL,
                [token, request.amount, request.min_base_amount, request.is_output_kaia],
            )
            receipt = await self._confirm(tx_hash)
            trade_event = get_event_from_receipt(receipt, [abi.TRADE_EVENT], abi.TRADE_EVENT["name"])
            self._logger.info(
                "sell_confirmed",
                tx_hash=tx_hash,
                amount=request.amount,
                is_output_kaia=request.is_output_kaia,
                trade_event_found=trade_event is not None,
            )
            return TradeResult(receipt=receipt, trade_event=trade_event)

    async def list(self, metadata: TokenMetadata) -> ListResult:
        """List a new token: store its metadata, then pay the listing fee on-chain.

        Raises:
            InvalidInputError: Missing required metadata fields.
            UnsupportedChainError: Connection bound to another chain; nothing is sent.
            InsufficientBalanceError: Signer balance below LISTING_FEE_WEI; no metadata POST.
            RemoteEndpointError: Metadata POST failed; no transaction is attempted.
            TransactionFailedError: Submission, inclusion wait or revert.
        """
        metadata.validate()
        self._ensure_supported_chain()

        with bound_contextvars(operation="list", token_symbol=metadata.symbol):
            balance = await self._chain_client.get_balance(self.wallet_address)
            if balance < LISTING_FEE_WEI:
                self._logger.warning(
                    "list_insufficient_balance",
                    balance_wei=balance,
                    required_wei=LISTING_FEE_WEI,
                )
                raise InsufficientBalanceError(balance, LISTING_FEE_WEI)

            serialized = json.dumps(
                metadata.to_payload(self.wallet_address, int(self._clock() * 1000)),
                separators=(",", ":"),
                ensure_ascii=False,
            )
            metadata_hash = await self._api.post_metadata(serialized)
            self._logger.info("list_metadata_stored", metadata_hash=metadata_hash)

            tx_hash = await self._chain_client.submit_transaction(
                self._core_address,
                abi.LIST_WITH_ETH,
                [self._base_token_address, metadata.name, metadata.symbol, metadata_hash],
                value=LISTING_FEE_WEI,
            )
            receipt = await self._confirm(tx_hash)
            list_event = get_event_from_receipt(receipt, [abi.LIST_EVENT], abi.LIST_EVENT["name"])
            result = ListResult(receipt=receipt, list_event=list_event)
            self._logger.info(
                "list_confirmed",
                tx_hash=tx_hash,
                token_address=result.token_address,
                list_event_found=list_event is not None,
            )
            return result

    async def upload_image(self, content: bytes, filename: str, mime_type: str) -> Optional[str]:
        """Upload image bytes to KaiaFun. Returns the assigned URL or None on failure.

        Raises:
            InvalidInputError: If content is empty.
        """
        if not content:
            raise InvalidInputError("Image content is empty")
        return await self._api.upload(content, filename, mime_type)

    # --- Reads ---

    async def get_native_balance(self) -> int:
        """Signer's native balance in wei."""
        return await self._chain_client.get_balance(self.wallet_address)

    async def get_token_balance(self, token_address: str) -> TokenBalance:
        """Signer's ERC-20 balance with the token's decimals and symbol."""
        if not is_hex_address(token_address):
            raise InvalidInputError(f"Invalid token address: {token_address!r}")
        token = Web3.to_checksum_address(token_address)
        decimals, symbol, raw = await asyncio.gather(
            self._chain_client.call_function(token, abi.ERC20_READ_ABI, "decimals"),
            self._chain_client.call_function(token, abi.ERC20_READ_ABI, "symbol"),
            self._chain_client.call_function(
                token, abi.ERC20_READ_ABI, "balanceOf", self.wallet_address
            ),
        )
        return TokenBalance(token_address=token, symbol=str(symbol), decimals=int(decimals), raw=int(raw))

    async def get_token_info(self, token_address: str) -> TokenInfo:
        """ERC-20 name, symbol, decimals and total supply."""
        if not is_hex_address(token_address):
            raise InvalidInputError(f"Invalid token address: {token_address!r}")
        token = Web3.to_checksum_address(token_address)
        name, symbol, decimals, total_supply = await asyncio.gather(
            self._chain_client.call_function(token, abi.ERC20_READ_ABI, "name"),
            self._chain_client.call_function(token, abi.ERC20_READ_ABI, "symbol"),
            self._chain_client.call_function(token, abi.ERC20_READ_ABI, "decimals"),
            self._chain_client.call_function(token, abi.ERC20_READ_ABI, "totalSupply"),
        )
        return TokenInfo(
            token_address=token,
            name=str(name),
            symbol=str(symbol),
            decimals=int(decimals),
            total_supply=int(total_supply),
        )
