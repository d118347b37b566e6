"""
Command Line Interface Package

Click-based binding of the expense operations over the configured store.

Command Structure:
- forkthebill: Main entry point with utility commands (version, config)
- forkthebill expense: create, show, list, claim, unclaim, set-items, set-tax-tip
"""
