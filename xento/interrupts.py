"""Hardware interrupt vectors, IRQ handler dispatch and PIC masking."""

from __future__ import annotations

import threading
from enum import IntEnum
from typing import Callable

__all__ = [
    "PIC1_DATA_PORT",
    "PIC2_DATA_PORT",
    "PIC_1_OFFSET",
    "PIC_2_OFFSET",
    "InterruptIndex",
    "IrqController",
]

PIC1_DATA_PORT = 0x21
PIC2_DATA_PORT = 0xA1

PIC_1_OFFSET = 32
PIC_2_OFFSET = PIC_1_OFFSET + 8

_IRQ_COUNT = 16
_IRQS_PER_PIC = 8


class InterruptIndex(IntEnum):
    """Interrupt vectors of the sixteen IRQ lines, after remapping the PICs."""

    TIMER = PIC_1_OFFSET
    KEYBOARD = PIC_1_OFFSET + 1
    CASCADE = PIC_1_OFFSET + 2
    COM2 = PIC_1_OFFSET + 3
    COM1 = PIC_1_OFFSET + 4
    LPT2 = PIC_1_OFFSET + 5
    FLOPPY_DISK = PIC_1_OFFSET + 6
    LPT1 = PIC_1_OFFSET + 7
    RTC = PIC_2_OFFSET
    PERIPHERALS1 = PIC_2_OFFSET + 1
    PERIPHERALS2 = PIC_2_OFFSET + 2
    PERIPHERALS3 = PIC_2_OFFSET + 3
    PS2 = PIC_2_OFFSET + 4
    FPU = PIC_2_OFFSET + 5
    PRIMARY_ATA = PIC_2_OFFSET + 6
    SECONDARY_ATA = PIC_2_OFFSET + 7

    @property
    def irq(self) -> int:
        """The IRQ line (0-15) this vector belongs to."""
        return self.value - PIC_1_OFFSET


def _default_irq_handler() -> None:
    pass


def _check_irq(irq: int) -> None:
    if not 0 <= irq < _IRQ_COUNT:
        raise ValueError(f"IRQ must be between 0 and {_IRQ_COUNT - 1}, got {irq}")


class IrqController:
    """A table of IRQ handlers in front of a pair of chained PICs.

    Both PICs start with every line masked; installing a handler unmasks
    its line.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._handlers: list[Callable[[], None]] = [_default_irq_handler] * _IRQ_COUNT
        self._masks = {PIC1_DATA_PORT: 0xFF, PIC2_DATA_PORT: 0xFF}
        self.acknowledged: list[int] = []

    @property
    def masks(self) -> dict[int, int]:
        """Current mask register of each PIC, keyed by its data port."""
        with self._lock:
            return dict(self._masks)

    def set_irq_handler(self, irq: int, handler: Callable[[], None]) -> None:
        """Install ``handler`` for an IRQ line and unmask the line."""
        _check_irq(irq)
        if not callable(handler):
            raise TypeError("an IRQ handler must be callable")
        with self._lock:
            self._handlers[irq] = handler
            self.clear_irq_mask(irq)

    def dispatch(self, vector: int) -> None:
        """Run the handler of an IRQ vector, then signal end of interrupt."""
        if not PIC_1_OFFSET <= vector < PIC_1_OFFSET + _IRQ_COUNT:
            raise ValueError(f"not an IRQ vector: {vector}")
        with self._lock:
            handler = self._handlers[vector - PIC_1_OFFSET]
        handler()
        with self._lock:
            self.acknowledged.append(int(vector))

    def set_irq_mask(self, irq: int) -> None:
        """Mask (disable) an IRQ line."""
        port, bit = self._locate(irq)
        with self._lock:
            self._masks[port] |= 1 << bit

    def clear_irq_mask(self, irq: int) -> None:
        """Unmask (enable) an IRQ line."""
        port, bit = self._locate(irq)
        with self._lock:
            self._masks[port] &= ~(1 << bit) & 0xFF

    def is_masked(self, irq: int) -> bool:
        """Whether an IRQ line is currently masked."""
        port, bit = self._locate(irq)
        with self._lock:
            return bool(self._masks[port] & (1 << bit))

    @staticmethod
    def _locate(irq: int) -> tuple[int, int]:
        _check_irq(irq)
        if irq < _IRQS_PER_PIC:
            return PIC1_DATA_PORT, irq
        return PIC2_DATA_PORT, irq - _IRQS_PER_PIC