"""Tripsettle: shared trip expense balances and settlement plans."""
