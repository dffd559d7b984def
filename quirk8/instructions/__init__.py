"""Opcode handlers grouped by leading nibble."""
