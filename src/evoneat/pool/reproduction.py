"""
NEAT Reproduction Module

This module implements the Reproduction class, which builds the next generation
of genomes out of the current, speciated and evaluated, generation.

The next generation is built one species at a time:
1. Each species is allotted a number of offspring proportional to its mean fitness
   (explicit fitness sharing). Rounding drift is reconciled in species index order.
2. The fittest members of each species are carried over unchanged (elitism);
   every non-empty species keeps at least its best member.
3. The remaining offspring are bred: two parents are picked by the selection
   policy, crossed over, and the child is mutated.

Classes:
    Reproduction: Offspring allotment, elitism, crossover and mutation
"""

import math
import random
from loguru import logger
from typing import TYPE_CHECKING

from evoneat.genotype.genome  import Genome
from evoneat.pool.selection   import RankSelection, SelectionPolicy
if TYPE_CHECKING:
    from evoneat.genotype.connection_gene   import ConnectionGene
    from evoneat.genotype.innovation_ledger import InnovationRegistry
    from evoneat.run.config import Config

def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves away from zero (for x >= 0)."""
    return int(math.floor(x + 0.5))

class Reproduction:
    """
    Builds the next generation of genomes.

    Public Methods:
        reproduce(genomes, species, innovations): Build the next generation
        allot(genomes, species):                  Number of offspring per species
        elite_counts(sizes, species):             Number of elite members per species
        crossover(gen1, gen2):                    Create a child out of two parents
    """

    def __init__(self, config: 'Config', selection_policy: SelectionPolicy | None = None):
        """
        Parameters:
            config:           Stores configuration parameters
            selection_policy: Picks the parents of each child (default: rank selection)
        """
        self._config          = config
        self.selection_policy = selection_policy if selection_policy is not None else RankSelection()

    def reproduce(self,
                  genomes    : list[Genome],
                  species    : list[list[int]],
                  innovations: 'InnovationRegistry') -> list[Genome]:
        """
        Build the next generation.

        Parameters:
            genomes:     the current generation (all genomes evaluated)
            species:     for each species, the indices of its members in 'genomes'
            innovations: registry of the structural mutations of this generation

        Returns:
            the new generation, exactly 'population_size' genomes long,
            with the contribution of each species stored contiguously

        Raises:
            RuntimeError: if a genome has not been evaluated
        """
        for genome in genomes:
            if genome.fitness is None:
                raise RuntimeError("cannot reproduce a generation whose genomes have not all been evaluated")

        sizes  = self.allot(genomes, species)
        elites = self.elite_counts(sizes, species)

        offspring_all = []
        for spec_id, members in enumerate(species):
            if sizes[spec_id] == 0:
                continue

            # Elitism: the fittest members are transferred unchanged.
            by_fitness = sorted(members, key=lambda i: genomes[i].fitness, reverse=True)
            offspring  = [genomes[i].copy() for i in by_fitness[:elites[spec_id]]]

            # The selection policy works on fitnesses in ascending order
            ranked    = sorted(members, key=lambda i: genomes[i].fitness)
            fitnesses = [genomes[i].fitness for i in ranked]
            while len(offspring) < sizes[spec_id]:
                idx1, idx2 = self.selection_policy.select(fitnesses)
                child = self.crossover(genomes[ranked[idx1]], genomes[ranked[idx2]])
                child.mutate(innovations)
                offspring.append(child)

            offspring_all.extend(offspring)

        assert len(offspring_all) == self._config.population_size, "Lost genomes during reproduction!"
        return offspring_all

    def allot(self, genomes: list[Genome], species: list[list[int]]) -> list[int]:
        """
        Calculate how many offspring each species should produce.

        Each species gets a share of the population proportional to its mean
        fitness, rounded to the nearest integer. Empty species contribute a mean
        fitness of 0 and get nothing; every non-empty species gets at least one
        slot. If the total differs from the population size, one slot at a time
        is added to (or removed from) the species in index order, wrapping around,
        until the sizes add up. If all species have zero fitness, the population
        is shared uniformly among the non-empty species.

        Parameters:
            genomes: the current generation (all genomes evaluated)
            species: for each species, the indices of its members in 'genomes'

        Returns:
            list with the number of offspring of each species
        """
        population_size = self._config.population_size
        num_species     = len(species)

        means = []
        for members in species:
            if members:
                means.append(sum(genomes[i].fitness for i in members) / len(members))
            else:
                means.append(0.0)

        shares = [max(mean, 0.0) for mean in means]
        total  = sum(shares)

        if total > 0.0:
            sizes = [round_half_up(share / total * population_size) for share in shares]
        else:
            logger.warning("[Reproduction] total species fitness is zero, allotting offspring uniformly")
            num_nonempty = sum(1 for members in species if members)
            sizes = [round_half_up(population_size / num_nonempty) if members else 0 for members in species]

        sizes = [max(size, 1) if members else 0 for size, members in zip(sizes, species)]
        logger.debug("[Reproduction] mean fitness: {} raw allotment: {}", means, sizes)

        # Reconcile the rounding drift in species index order
        delta = population_size - sum(sizes)
        i = 0
        while delta > 0:
            if species[i % num_species]:
                sizes[i % num_species] += 1
                delta -= 1
            i += 1
        i = 0
        while delta < 0:
            if sizes[i % num_species] > 1:
                sizes[i % num_species] -= 1
                delta += 1
            i += 1

        logger.debug("[Reproduction] reconciled allotment: {}", sizes)
        return sizes

    def elite_counts(self, sizes: list[int], species: list[list[int]]) -> list[int]:
        """
        Calculate how many members of each species are carried over unchanged.

        The count is the elitism proportion of the allotted size, rounded, but
        at least 1 for every species that is allotted offspring, and never more
        than the allotted size or the number of members.

        Parameters:
            sizes:   number of offspring allotted to each species
            species: for each species, the indices of its members

        Returns:
            list with the number of elite members of each species
        """
        counts = []
        for size, members in zip(sizes, species):
            if size == 0 or not members:
                counts.append(0)
                continue
            count = max(1, round_half_up(self._config.elitism_proportion * size))
            counts.append(min(count, size, len(members)))
        return counts

    def crossover(self, gen1: Genome, gen2: Genome) -> Genome:
        """
        Create a child genome out of two evaluated parents.

        If the parents are equally fit and cycles are allowed, the genes of both
        parents are aligned by innovation number: a matching gene is inherited
        from either parent with equal probability, and a gene present in only one
        parent is inherited with probability 0.5.

        Otherwise the child copies the structure of the fitter parent (of a random
        parent if they are equally fit). For genes that also exist in the other
        parent, the weight comes from either parent with equal probability, and
        if either copy is disabled the gene is disabled with 'disable_probability'.
        If either parent has no genes, the parent with more genes is the base.

        The child has as many nodes as the larger parent.

        Parameters:
            gen1: the first parent
            gen2: the second parent

        Returns:
            the child genome (fitness not evaluated)
        """
        equal_fitness = abs(gen1.fitness - gen2.fitness) < self._config.fitness_tie_tolerance
        node_count    = max(gen1.node_count, gen2.node_count)

        if not gen1.conn_genes or not gen2.conn_genes:
            if len(gen1.conn_genes) != len(gen2.conn_genes):
                base_is_gen1 = len(gen1.conn_genes) > len(gen2.conn_genes)
            else:
                base_is_gen1 = gen1.fitness >= gen2.fitness
        elif equal_fitness and not self._config.acyclic:
            return self._crossover_aligned(gen1, gen2, node_count)
        elif equal_fitness:
            base_is_gen1 = random.random() < 0.5
        else:
            base_is_gen1 = gen1.fitness > gen2.fitness

        base, other = (gen1, gen2) if base_is_gen1 else (gen2, gen1)
        return self._crossover_from_base(base, other, node_count)

    def _crossover_from_base(self, base: Genome, other: Genome, node_count: int) -> Genome:
        genes = [gene.copy() for gene in base.conn_genes.values()]
        for gene in genes:
            match = other.conn_genes.get(gene.innovation)
            if match is None:
                continue

            # If either parent has the gene disabled, it is disabled with a preset chance
            if not gene.enabled or not match.enabled:
                gene.enabled = random.random() >= self._config.disable_probability

            if random.random() < 0.5:
                gene.weight = match.weight

        return Genome.from_genes(self._config, genes, node_count, base.bias)

    def _crossover_aligned(self, gen1: Genome, gen2: Genome, node_count: int) -> Genome:
        genes1 = gen1.connection_genes
        genes2 = gen2.connection_genes
        genes  : list['ConnectionGene'] = []

        i = j = 0
        while i < len(genes1) and j < len(genes2):
            innov1 = genes1[i].innovation
            innov2 = genes2[j].innovation
            if innov1 == innov2:
                genes.append(genes1[i] if random.random() < 0.5 else genes2[j])
                i += 1
                j += 1
            elif innov1 < innov2:
                if random.random() < 0.5:
                    genes.append(genes1[i])
                i += 1
            else:
                if random.random() < 0.5:
                    genes.append(genes2[j])
                j += 1

        # Excess genes
        for gene in genes1[i:] + genes2[j:]:
            if random.random() < 0.5:
                genes.append(gene)

        bias = gen1.bias if random.random() < 0.5 else gen2.bias
        return Genome.from_genes(self._config, genes, node_count, bias)
