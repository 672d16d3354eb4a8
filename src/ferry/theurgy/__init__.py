"""
Theurgy - Command implementations for ferry.

Each module corresponds to top-level CLI commands:
- deploy:   Deploy the L1 messaging contracts with forge
- message:  Send or consume L1 <-> L2 messages (plus usage helpers)
- selector: Derive a Starknet selector from a function name
"""
