"""Test suite for the ledgerprint package."""
