"""Tests for presence history."""
