"""Tests for pinstall."""
