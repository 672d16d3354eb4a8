"""
Pneuma - On-chain interaction layer for ferry.

Provides the JSON-RPC client, ABI encoding, transaction utilities,
Starknet selector derivation and the Foundry deploy runner used to
talk to the L1 messaging contract.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""
