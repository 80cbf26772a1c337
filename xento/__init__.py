"""Kernel building blocks: allocators, tasks, clocks, interrupts, PNG decoding and JSON."""

__version__ = "2023.1.0"