"""
NEAT Pool Package

This package manages the population of genomes: splitting it into species,
allotting offspring, selecting parents, crossing them over and mutating the
offspring.

Exported Classes:
    Population:      A generation of genomes and its species
    Speciator:       Clusters genomes into species with k-means
    Reproduction:    Offspring allotment, elitism, crossover and mutation
    SelectionPolicy: Contract for parent selection policies
    RankSelection:   Rank-proportionate parent selection
"""

from evoneat.pool.population   import Population
from evoneat.pool.reproduction import Reproduction
from evoneat.pool.selection    import RankSelection, SelectionPolicy
from evoneat.pool.speciator    import Speciator

__all__ = ['Population',
           'RankSelection',
           'Reproduction',
           'SelectionPolicy',
           'Speciator']
