"""
NEAT Connection Gene Module

This module implements the ConnectionGene class for the
NEAT (NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    ConnectionGene: Gene encoding a weighted connection between nodes
"""

import random

class ConnectionGene:
    """
    A gene describing a weighted connection between two nodes in a Neural Network.

    Each connection gene represents a directed edge in the neural network graph,
    connecting a source node to a target node with an associated weight.
    Connection genes are uniquely identified by their innovation number, which
    serves as a historical marker enabling proper gene alignment during crossover.

    Connections can be enabled or disabled, allowing NEAT to preserve structural
    information while temporarily deactivating pathways. Disabled connections may
    be re-enabled during crossover.

    Public Attributes:
        source:     ID of the source node
        target:     ID of the target node
        weight:     Weight of the connection
        enabled:    Whether this connection is active in the network
        innovation: Global innovation number uniquely identifying this connection

    Public Methods:
        perturb(probability, size): Stochastically perturb the connection weight
        copy():                     Return an independent copy of the gene
    """

    __slots__ = ('source', 'target', 'weight', 'enabled', 'innovation')

    def __init__(self,
                 source    : int,
                 target    : int,
                 weight    : float,
                 innovation: int,
                 enabled   : bool = True):
        """
        Initialize a connection gene.

        Parameters:
            source:     ID of the source node
            target:     ID of the target node
            weight:     Weight of the connection
            innovation: Number uniquely and globally identifying this connection
            enabled:    Whether this connection is active in the network
        """
        self.source    : int   = source
        self.target    : int   = target
        self.weight    : float = weight
        self.enabled   : bool  = enabled
        self.innovation: int   = innovation

    def perturb(self, probability: float, size: float) -> bool:
        """
        Stochastically perturb the weight by a bounded random delta.

        Parameters:
            probability: chance that the weight is perturbed at all
            size:        the delta is drawn uniformly from [-size, +size]

        Returns:
            whether the weight was changed
        """
        if random.random() < probability:
            self.weight += random.uniform(-size, size)
            return True
        return False

    def copy(self) -> 'ConnectionGene':
        return ConnectionGene(self.source, self.target, self.weight, self.innovation, self.enabled)

    def __eq__(self, other):
        if not isinstance(other, ConnectionGene):
            return NotImplemented
        return (self.source     == other.source     and
                self.target     == other.target     and
                self.weight     == other.weight     and
                self.enabled    == other.enabled    and
                self.innovation == other.innovation)

    def __repr__(self):
        return (f"ConnectionGene(source={self.source:03d}, target={self.target:03d}, "
                f"weight={self.weight:+.6f}, enabled={self.enabled}, innovation={self.innovation:03d})")

    def __str__(self):
        s  = f"[{self.innovation:03d},{'E' if self.enabled else 'D'},"
        s += f"{self.source:02d}=>{self.target:02d},{self.weight:+.02f}]"
        return s
