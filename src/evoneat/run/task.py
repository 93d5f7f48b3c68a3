"""
NEAT Task Module

This module defines the contract between the evolutionary engine and the
problem being solved.

Classes:
    Task: Abstract base class for fitness evaluators
"""

from abc    import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from evoneat.genotype import Genome

class Task(ABC):
    """
    Abstract base class for the problem a NEAT run optimizes.

    Subclasses must implement:
    - evaluate(genome): score a single genome

    The evaluation must be a pure function of the genome's topology and weights;
    a stateful (e.g. episodic) task must reset its state on every call. It must
    not modify the genome. It is called once per genome per generation, possibly
    from several processes at once (see 'EvolutionController.train').

    Public Methods:
        evaluate(genome): Return the fitness of a genome
    """

    @abstractmethod
    def evaluate(self, genome: 'Genome') -> float:
        """
        Evaluate and return the fitness of a genome.

        Higher fitness values indicate better performance and a higher
        probability of procreating. The fitness must be a finite number,
        and should be positive (or zero).

        Parameters:
            genome: The genome to evaluate

        Returns:
            float: Fitness score for the genome
        """
        pass
