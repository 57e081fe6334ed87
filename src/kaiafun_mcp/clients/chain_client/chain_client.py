# -*- coding: utf-8 -*-
"""Async facade for the Kaia JSON-RPC connection (web3.py) with asyncio.to_thread.

Centralizes Web3 and signing-account construction from settings and runs all
sync web3 calls in a thread pool so callers can use async/await without
blocking the event loop.

- Reads: chain id, native balance, contract view calls.
- Writes: build + sign + send one contract call, wait for its receipt.

Retry/timeout policy belongs to the provider (request timeout) and to
wait_for_transaction_receipt (receipt timeout, poll latency); nothing is retried here.
"""

from __future__ import annotations

import asyncio
import structlog
from typing import Any, Callable, Optional, Sequence, TypeVar

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.middleware import ExtraDataToPOAMiddleware
from web3.types import TxReceipt

from kaiafun_mcp.chain import KAIA_MAINNET, ChainDescriptor, to_hex_str
from kaiafun_mcp.chain.abi import ABIEntry
from kaiafun_mcp.config import Settings
from kaiafun_mcp.exceptions import MissingRequiredConfigError, TransactionFailedError
from kaiafun_mcp.utils import mask_address

T = TypeVar("T")


def _build_web3(settings: Settings, chain: ChainDescriptor) -> Web3:
    """Build a sync Web3 over HTTP from settings.

    Kaia blocks carry PoA-style extraData, hence the middleware.
    """
    rpc_url = settings.chain.rpc_url or chain.default_rpc_url
    w3 = Web3(
        Web3.HTTPProvider(
            rpc_url,
            request_kwargs={"timeout": settings.chain.request_timeout_seconds},
        )
    )
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)
    return w3


def _build_account(settings: Settings) -> LocalAccount:
    """Build the signing account from the configured private key.

    Raises:
        MissingRequiredConfigError: If PRIVATE_KEY is not set.
    """
    private_key = (settings.wallet.private_key or "").strip()
    if not private_key:
        raise MissingRequiredConfigError("PRIVATE_KEY")
    return Account.from_key(private_key)


class AsyncChainClient:
    """Chain connection bound to one chain id, with one signing identity."""

    def __init__(
        self,
        settings: Settings,
        *,
        chain: ChainDescriptor = KAIA_MAINNET,
        web3: Optional[Web3] = None,
        account: Optional[LocalAccount] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize from settings or pre-built web3/account objects.

        Args:
            settings: Application settings (RPC URL, bound chain id, timeouts, private key).
            chain: Chain descriptor; its id is replaced by CHAIN__CHAIN_ID when they differ.
            web3: Optional pre-built Web3 (e.g. tests). If None, builds from settings.
            account: Optional signing account. If None, builds from the private key.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        if settings.chain.chain_id != chain.id:
            chain = chain.with_id(settings.chain.chain_id)
        self._chain = chain
        self._w3 = web3 if web3 is not None else _build_web3(settings, chain)
        self._account = account if account is not None else _build_account(settings)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def chain(self) -> ChainDescriptor:
        """Descriptor of the chain this connection is bound to."""
        return self._chain

    @property
    def address(self) -> str:
        """Checksummed address of the signing account."""
        return self._account.address

    async def _run(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run a sync web3 call in a thread."""
        return await asyncio.to_thread(fn, *args, **kwargs)

    # --- Reads ---

    async def get_network_chain_id(self) -> int:
        """Chain id reported by the RPC node (network call)."""
        return int(await self._run(lambda: self._w3.eth.chain_id))

    async def get_balance(self, address: Optional[str] = None) -> int:
        """Native balance in wei of ``address`` (defaults to the signer)."""
        target = Web3.to_checksum_address(address or self.address)
        return int(await self._run(self._w3.eth.get_balance, target))

    async def call_function(
        self,
        contract_address: str,
        abi: Sequence[ABIEntry],
        function_name: str,
        *args: Any,
    ) -> Any:
        """Run a read-only contract call and return the decoded result."""
        contract = self._w3.eth.contract(
            address=Web3.to_checksum_address(contract_address),
            abi=list(abi),
        )
        return await self._run(contract.functions[function_name](*args).call)

    # --- Writes ---

    def _submit_sync(
        self,
        contract_address: str,
        abi_entry: ABIEntry,
        args: Sequence[Any],
        value: int,
    ) -> str:
        contract = self._w3.eth.contract(
            address=Web3.to_checksum_address(contract_address),
            abi=[abi_entry],
        )
        call = contract.functions[abi_entry["name"]](*args)
        tx = call.build_transaction(
            {
                "from": self._account.address,
                "value": int(value),
                "nonce": self._w3.eth.get_transaction_count(self._account.address, "pending"),
                "chainId": self._chain.id,
            }
        )
        signed = self._account.sign_transaction(tx)
        tx_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
        return to_hex_str(tx_hash)

    async def submit_transaction(
        self,
        contract_address: str,
        abi_entry: ABIEntry,
        args: Sequence[Any],
        value: int = 0,
    ) -> str:
        """Build, sign and send one contract call. Returns the transaction hash.

        Raises:
            TransactionFailedError: If building (gas estimation), signing or sending fails.
        """
        function_name = abi_entry["name"]
        try:
            tx_hash = await self._run(self._submit_sync, contract_address, abi_entry, args, value)
        except Exception as e:
            self._logger.warning(
                "chain_submit_failed",
                function_name=function_name,
                contract_masked=mask_address(contract_address),
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise TransactionFailedError(str(e), cause=e) from e
        self._logger.info(
            "chain_submitted",
            function_name=function_name,
            contract_masked=mask_address(contract_address),
            value_wei=int(value),
            tx_hash=tx_hash,
        )
        return tx_hash

    async def wait_for_receipt(self, tx_hash: str) -> TxReceipt:
        """Block (in a thread) until the transaction is included and return its receipt.

        Raises:
            TransactionFailedError: On timeout or RPC failure while polling.
        """
        try:
            return await self._run(
                self._w3.eth.wait_for_transaction_receipt,
                tx_hash,
                timeout=self._settings.chain.receipt_timeout_seconds,
                poll_latency=self._settings.chain.receipt_poll_seconds,
            )
        except Exception as e:
            self._logger.warning(
                "chain_wait_for_receipt_failed",
                tx_hash=tx_hash,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise TransactionFailedError(str(e), tx_hash=tx_hash, cause=e) from e
