"""
NEAT Population Module

This module implements the Population class, which holds one generation of
genomes together with its split into species, and turns it into the next
generation.

Classes:
    Population: A generation of genomes and its species
"""

from loguru import logger
from typing import TYPE_CHECKING

from evoneat.genotype          import Genome, InnovationRegistry
from evoneat.pool.reproduction import Reproduction
from evoneat.pool.speciator    import Speciator

if TYPE_CHECKING:
    from evoneat.genotype import InnovationLedger
    from evoneat.pool.selection import SelectionPolicy
    from evoneat.run.config import Config

class Population:
    """
    A population of evolving genomes in the NEAT algorithm.

    The population keeps the genomes of the current generation in a single list
    and represents the species as lists of indices into that list. The whole
    generation is replaced when the next one is spawned; elites are carried over
    by value, never by reference.

    Public Attributes:
        genomes: List of all genomes in the current generation
        species: For each species, the indices of its members in 'genomes'

    Public Methods:
        speciate(init):           Split the current generation into species
        reproduce():              Replace the generation with its offspring
        best_genome():            Return the genome with highest fitness
    """

    def __init__(self,
                 config          : 'Config',
                 ledger          : 'InnovationLedger',
                 selection_policy: 'SelectionPolicy | None' = None):
        """
        Create the initial generation of minimal genomes and split it into species.

        Parameters:
            config:           Stores configuration parameters
            ledger:           Issues innovation numbers for the whole run
            selection_policy: Picks the parents of each child (default: rank selection)
        """
        self._config       = config
        self._ledger       = ledger
        self._speciator    = Speciator(config)
        self._reproduction = Reproduction(config, selection_policy)

        # All initial genomes share the innovation numbers of their (identical) topology
        innovations  = InnovationRegistry(ledger, merge=True)
        self.genomes : list[Genome]     = [Genome(config, innovations) for _ in range(config.population_size)]
        self.species : list[list[int]]  = []

        self.speciate(init=True)

    def speciate(self, init: bool) -> None:
        """
        Split the current generation into species.

        Parameters:
            init: cluster from scratch (True) or starting from the previous species (False)
        """
        self.species = self._speciator.speciate(self.genomes, self._ledger.count, init)

    def reproduce(self) -> int:
        """
        Replace the current (evaluated) generation with the next one.
        The new generation must be split into species with 'speciate(init=False)'.

        The structural mutations of the new generation are recorded in a registry
        that lives only for the duration of this call.

        Returns:
            the number of structural mutations performed
        """
        innovations  = InnovationRegistry(self._ledger, merge=self._config.merge_innovations)
        self.genomes = self._reproduction.reproduce(self.genomes, self.species, innovations)

        logger.debug("[Population] {} structural mutations, {} innovations issued so far",
                     innovations.mutations, self._ledger.count)
        return innovations.mutations

    def best_genome(self) -> Genome | None:
        """
        Find the genome with the highest fitness (the first one, on ties).

        Returns:
            The fittest genome, or None if no genome has been evaluated
        """
        best = None
        for genome in self.genomes:
            if genome.fitness is None:
                continue
            if best is None or genome.fitness > best.fitness:
                best = genome
        return best

    @property
    def species_sizes(self) -> list[int]:
        return [len(members) for members in self.species]

    def __len__(self):
        return len(self.genomes)

    def __str__(self):
        return '\n'.join(str(genome) for genome in self.genomes)
