"""
EvoNEAT - NeuroEvolution of Augmenting Topologies with k-means speciation.

This package evolves neural network topologies and weights with the NEAT
algorithm. Genomes are split into a fixed number of species by k-means
clustering of their connection weights, aligned by innovation number.

Main components:
- genotype:  Genetic encoding (genomes, connection genes, innovation numbers)
- phenotype: Neural network expression of a genome
- pool:      Speciation, parent selection and reproduction
- run:       Configuration, the task contract and the evolution controller

Example:
    >>> from evoneat import Config, EvolutionController, Task
    >>> config = Config("config.ini")
    >>> class MyTask(Task):
    ...     def evaluate(self, genome):
    ...         # Implement fitness evaluation
    ...         pass
    >>> best = EvolutionController(MyTask(), config).train()
"""

__version__ = "0.1.0"

from evoneat.genotype  import ConnectionGene, Genome, InnovationLedger, InnovationRegistry
from evoneat.phenotype import ActivationFunction, Network
from evoneat.pool      import Population, RankSelection, Reproduction, SelectionPolicy, Speciator
from evoneat.run       import Config, ControllerState, EvolutionController, GenerationStats, Task

__all__ = [
    "ActivationFunction",
    "Config",
    "ConnectionGene",
    "ControllerState",
    "EvolutionController",
    "GenerationStats",
    "Genome",
    "InnovationLedger",
    "InnovationRegistry",
    "Network",
    "Population",
    "RankSelection",
    "Reproduction",
    "SelectionPolicy",
    "Speciator",
    "Task",
]
