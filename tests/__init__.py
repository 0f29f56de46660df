"""Tests for learnscore."""
