"""Fresh blank node label allocation.

A :class:`BlankNodeGenerator` belongs to exactly one parse. It hands out
labels of the form ``gen-N`` or ``gen-N-<hint>`` with ``N`` counting up from 1,
skipping any candidate that was already seen as an explicit label in the
input (``rdf:nodeID``). The parser must call :meth:`BlankNodeGenerator.observe`
for every explicit label it reads.

Example:
        gen = BlankNodeGenerator()
        gen.observe("gen-1")
        gen.generate()            # BlankNodeID('gen-2')
        gen.generate("list")      # BlankNodeID('gen-3-list')

An explicit label that first appears after the generator already produced the
same label is remapped to a fresh label for the rest of the parse, so the two
nodes stay distinct.
"""

from __future__ import annotations

import logging
from typing import Dict, Set

from .models import BlankNodeID, check_blank_node_label

logger = logging.getLogger(__name__)


class BlankNodeGenerator:
    """Allocate blank node labels that never collide with observed labels.

    Args:
        prefix: Leading part of every generated label. Must itself start a
            valid ``BLANK_NODE_LABEL``.
    """

    def __init__(self, prefix: str = "gen") -> None:
        check_blank_node_label(f"{prefix}-1")
        self.prefix = prefix
        self._counter = 0
        self._observed: Set[str] = set()
        self._generated: Set[str] = set()
        self._remapped: Dict[str, str] = {}

    @property
    def counter(self) -> int:
        """Number of candidates consumed so far (including skipped ones)."""
        return self._counter

    @property
    def observed(self) -> Set[str]:
        return set(self._observed)

    def observe(self, label: str) -> str:
        """Record an explicit label from the input so it is never generated.

        Returns:
            The label to use for this node: ``label`` itself, or a fresh
            label when ``label`` was already handed out by :meth:`generate`.
        """
        if label in self._remapped:
            return self._remapped[label]
        if label in self._generated:
            fresh = self.generate().label
            logger.debug(f"Explicit blank node {label} collides with a generated label, using {fresh}")
            self._remapped[label] = fresh
            return fresh
        self._observed.add(label)
        return label

    def generate(self, hint: str = "") -> BlankNodeID:
        """Return the next unused label, optionally suffixed with ``hint``."""
        while True:
            self._counter += 1
            label = f"{self.prefix}-{self._counter}"
            if hint:
                label = f"{label}-{hint}"
            if label in self._observed:
                logger.debug(f"Skipping generated blank node {label}: label present in input")
                continue
            check_blank_node_label(label)
            self._generated.add(label)
            return BlankNodeID(label)
