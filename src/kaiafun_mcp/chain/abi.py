"""ABI fragments for the KaiaFun core contract and ERC-20 reads."""

from __future__ import annotations

from typing import Any

ABIEntry = dict[str, Any]

BUY_WITH_ETH: ABIEntry = {
    "inputs": [
        {"internalType": "address", "name": "_tokenAddress", "type": "address"},
        {"internalType": "uint256", "name": "_minTokenAmount", "type": "uint256"},
    ],
    "name": "buyWithETH",
    "outputs": [],
    "stateMutability": "payable",
    "type": "function",
}

LIST_WITH_ETH: ABIEntry = {
    "inputs": [
        {"internalType": "address", "name": "_wethAddress", "type": "address"},
        {"internalType": "string", "name": "_name", "type": "string"},
        {"internalType": "string", "name": "_symbol", "type": "string"},
        {"internalType": "string", "name": "_metadataHash", "type": "string"},
    ],
    "name": "listWithETH",
    "outputs": [],
    "stateMutability": "payable",
    "type": "function",
}

SELL: ABIEntry = {
    "inputs": [
        {"internalType": "address", "name": "_tokenAddress", "type": "address"},
        {"internalType": "uint256", "name": "_tokenAmount", "type": "uint256"},
        {"internalType": "uint256", "name": "_minBaseTokenAmount", "type": "uint256"},
        {"internalType": "bool", "name": "_isOutputETH", "type": "bool"},
    ],
    "name": "sell",
    "outputs": [{"internalType": "uint256", "name": "_baseTokenAfterFee", "type": "uint256"}],
    "stateMutability": "nonpayable",
    "type": "function",
}

TRADE_EVENT: ABIEntry = {
    "anonymous": False,
    "inputs": [
        {"indexed": True, "internalType": "address", "name": "tokenAddress", "type": "address"},
        {"indexed": True, "internalType": "address", "name": "sender", "type": "address"},
        {"indexed": False, "internalType": "uint256", "name": "baseIn", "type": "uint256"},
        {"indexed": False, "internalType": "uint256", "name": "tokenIn", "type": "uint256"},
        {"indexed": False, "internalType": "uint256", "name": "baseOut", "type": "uint256"},
        {"indexed": False, "internalType": "uint256", "name": "tokenOut", "type": "uint256"},
        {"indexed": False, "internalType": "uint256", "name": "baseFee", "type": "uint256"},
        {"indexed": False, "internalType": "address", "name": "instrument", "type": "address"},
    ],
    "name": "Trade",
    "type": "event",
}

LIST_EVENT: ABIEntry = {
    "anonymous": False,
    "inputs": [
        {"indexed": True, "internalType": "address", "name": "creator", "type": "address"},
        {"indexed": True, "internalType": "address", "name": "tokenAddress", "type": "address"},
        {"indexed": True, "internalType": "address", "name": "baseTokenAddress", "type": "address"},
        {"indexed": False, "internalType": "string", "name": "name", "type": "string"},
        {"indexed": False, "internalType": "string", "name": "symbol", "type": "string"},
        {"indexed": False, "internalType": "string", "name": "metadataHash", "type": "string"},
    ],
    "name": "List",
    "type": "event",
}

# Minimal ERC-20 read surface used by balance/info tools.
ERC20_READ_ABI: list[ABIEntry] = [
    {
        "inputs": [{"name": "account", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "balance", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "name",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]
