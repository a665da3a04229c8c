"""Tests - Test suite for the circuit verification protocol."""
