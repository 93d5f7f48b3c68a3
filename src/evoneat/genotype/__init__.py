"""
NEAT Genotype Package

This package implements the genotype representation for the NEAT (NeuroEvolution of
Augmenting Topologies) algorithm. It provides classes for encoding neural network
structures and parameters at the genetic level.

Nodes are implicit and densely numbered; a genome is described by its node count,
its bias value and its connection genes, each connection gene carrying an innovation
number that aligns it with its homologues in other genomes.

Modules:
    connection_gene:   ConnectionGene class
    genome:            Genome class
    innovation_ledger: InnovationLedger and InnovationRegistry classes

Exported Classes:
    ConnectionGene:     Gene encoding a weighted connection between nodes
    Genome:             Complete genome representing a neural network
    InnovationLedger:   Run-wide issuer of innovation numbers
    InnovationRegistry: Generation-scoped record of structural mutations
"""

from evoneat.genotype.connection_gene   import ConnectionGene
from evoneat.genotype.genome            import Genome
from evoneat.genotype.innovation_ledger import InnovationLedger, InnovationRegistry

__all__ = ['ConnectionGene',
           'Genome',
           'InnovationLedger',
           'InnovationRegistry']
