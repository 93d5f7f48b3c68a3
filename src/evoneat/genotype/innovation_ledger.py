"""
NEAT Innovation Ledger Module

This module implements the bookkeeping of innovation numbers for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    InnovationLedger:   Run-wide monotonic counter issuing innovation numbers
    InnovationRegistry: Generation-scoped record of structural mutations, used
                        to give identical mutations the same innovation numbers
"""

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from evoneat.genotype.connection_gene import ConnectionGene

class InnovationLedger:
    """
    Issues globally unique, monotonically increasing innovation numbers.

    One ledger is owned by an EvolutionController and threaded through every
    genome construction and structural mutation. Innovation numbers are never
    reused within a run; the ledger is reset only at the start of training.

    The counter is protected by a lock, so genomes may be created or mutated
    from several threads.

    Public Properties:
        count: Number of innovation numbers issued so far (also the next one)

    Public Methods:
        next_id(): Issue a new innovation number
        reset():   Restart numbering from 0
    """

    def __init__(self):
        self._next_id: int = 0
        self._lock         = threading.Lock()

    @property
    def count(self) -> int:
        """The number of innovation numbers issued so far."""
        with self._lock:
            return self._next_id

    def next_id(self) -> int:
        """
        Issue a fresh innovation number.

        Returns:
            the new innovation number
        """
        with self._lock:
            innovation    = self._next_id
            self._next_id += 1
        return innovation

    def reset(self) -> None:
        """Restart numbering from 0."""
        with self._lock:
            self._next_id = 0

    def __getstate__(self):
        # locks cannot be pickled
        state = self.__dict__.copy()
        del state['_lock']
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._lock = threading.Lock()

    def __repr__(self):
        return f"InnovationLedger(count={self.count})"


class InnovationRegistry:
    """
    Records the structural mutations performed during one generation.

    When merging is enabled, the same structural change made by different
    genomes within a generation receives the same innovation numbers:
     + adding a connection between the same (source, target) pair
     + splitting the connection with the same innovation number into the same
       new node ID (the two new connections are recorded as (source, target)
       pairs, so they also merge with later additions of the same pairs)
    When merging is disabled, every structural mutation draws fresh numbers
    from the ledger.

    A registry is created by the controller at the start of the reproduction
    phase and discarded when the phase ends; it never outlives a generation.

    Public Attributes:
        ledger:    The run-wide innovation ledger
        merge:     Whether identical mutations share innovation numbers
        mutations: Number of structural mutations recorded so far

    Public Methods:
        connection_innovation(source, target): Innovation number for a new connection
        split_innovations(gene, new_node):      Innovation numbers for a connection split
    """

    def __init__(self, ledger: InnovationLedger, merge: bool = True):
        self.ledger   : InnovationLedger = ledger
        self.merge    : bool             = merge
        self.mutations: int              = 0

        self._connections: dict[tuple[int, int], int]             = {}  # (source, target) => innovation
        self._splits     : dict[tuple[int, int], tuple[int, int]] = {}  # (split innovation, new node) => (innov1, innov2)

    def connection_innovation(self, source: int, target: int) -> int:
        """
        Get the innovation number for a new connection 'source' -> 'target'.

        Parameters:
            source: ID of the node where the connection starts
            target: ID of the node where the connection ends

        Returns:
            innovation number for the new connection
        """
        self.mutations += 1
        if not self.merge:
            return self.ledger.next_id()
        return self._pair_innovation(source, target)

    def split_innovations(self, gene: 'ConnectionGene', new_node: int) -> tuple[int, int]:
        """
        Get the innovation numbers for the two connections replacing a split connection:
        'gene.source' -> 'new_node' and 'new_node' -> 'gene.target'.

        Node IDs are local to a genome, so the split is identified by the innovation
        of the split connection together with the ID of the node inserted into it.

        Parameters:
            gene:     the connection being split
            new_node: ID of the node inserted into the connection

        Returns:
            2-tuple (innov1, innov2); 'innov1' is for the connection entering
            the new node, 'innov2' for the connection leaving it
        """
        self.mutations += 1
        if not self.merge:
            return self.ledger.next_id(), self.ledger.next_id()

        key = (gene.innovation, new_node)
        if key not in self._splits:
            innov1 = self._pair_innovation(gene.source, new_node)
            innov2 = self._pair_innovation(new_node, gene.target)
            self._splits[key] = (innov1, innov2)
        return self._splits[key]

    def _pair_innovation(self, source: int, target: int) -> int:
        key = (source, target)
        if key not in self._connections:
            self._connections[key] = self.ledger.next_id()
        return self._connections[key]
