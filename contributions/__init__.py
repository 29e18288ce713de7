"""Contribution Store - tracks when a uid started a contribution and how it ended."""
