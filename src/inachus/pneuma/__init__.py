"""
Pneuma - On-chain interaction layer for inachus.

Provides the ABI method model, argument codec, JSON-RPC provider and
wallet used to call and transact against deployed contracts.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
