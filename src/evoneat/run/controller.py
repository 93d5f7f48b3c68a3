"""
NEAT Evolution Controller Module

This module implements the EvolutionController, which drives a NEAT run:
it owns the population and repeats evaluate -> reproduce -> speciate for a
fixed number of generations, then returns the best genome of the final
generation.

Classes:
    ControllerState:     Stages of a run
    GenerationStats:     Summary statistics of one evaluated generation
    EvolutionController: Generational control loop
"""

import math
import random
import numpy as np
from dataclasses import dataclass
from enum        import Enum
from joblib      import Parallel, delayed
from loguru      import logger
from statistics  import mean
from typing      import TYPE_CHECKING

from evoneat.genotype        import Genome, InnovationLedger
from evoneat.pool.population import Population
from evoneat.run.config      import Config

if TYPE_CHECKING:
    from evoneat.pool.selection import SelectionPolicy
    from evoneat.run.task import Task

class ControllerState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED   = "initialized"
    EVALUATING    = "evaluating"
    REPRODUCING   = "reproducing"
    SPECIATING    = "speciating"
    TERMINATED    = "terminated"

@dataclass
class GenerationStats:
    """Summary statistics of one evaluated generation."""
    generation      : int
    best_fitness    : float
    mean_fitness    : float
    species_sizes   : list[int]
    innovations     : int
    mean_connections: float

class EvolutionController:
    """
    Runs the NEAT algorithm on a task.

    A run goes through the stages:
        UNINITIALIZED -> INITIALIZED -> (EVALUATING -> REPRODUCING -> SPECIATING) x max_generations
                      -> EVALUATING -> TERMINATED
    The final generation is evaluated once more so that the returned genome
    carries a fitness measured by the task.

    Public Attributes:
        state:      Current stage of the run
        population: The current generation (None before training)
        ledger:     Issues innovation numbers for the whole run
        history:    Statistics of every evaluated generation

    Public Methods:
        train(num_jobs): Execute a complete NEAT run and return the best genome

    Parallelization of fitness evaluation:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self,
                 task            : 'Task',
                 config          : Config,
                 selection_policy: 'SelectionPolicy | None' = None):
        """
        Parameters:
            task:             Evaluates the fitness of genomes
            config:           Configuration parameters
            selection_policy: Picks the parents of each child (default: rank selection)

        Raises:
            ValueError: if the configuration is invalid
        """
        config.validate()

        self._task             = task
        self._config           = config
        self._selection_policy = selection_policy

        self.state     : ControllerState       = ControllerState.UNINITIALIZED
        self.population: Population | None     = None
        self.ledger    : InnovationLedger      = InnovationLedger()
        self.history   : list[GenerationStats] = []

    def train(self, num_jobs: int = 1) -> Genome:
        """
        Run the NEAT algorithm.

        Resets the run state, creates and speciates the initial population, and
        evolves it for 'max_generations' generations.

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes

        Returns:
            the fittest genome of the final generation (the first one, on ties)
        """
        self._reset()

        self.population = Population(self._config, self.ledger, self._selection_policy)
        self.state      = ControllerState.INITIALIZED
        logger.info("[EvolutionController] Start: population={} species={} generations={}",
                    self._config.population_size, self._config.num_species, self._config.max_generations)

        for generation in range(self._config.max_generations):
            self._evaluate_all(generation, num_jobs)

            self.state = ControllerState.REPRODUCING
            self.population.reproduce()

            self.state = ControllerState.SPECIATING
            self.population.speciate(init=False)

        # Evaluate the final generation
        self._evaluate_all(self._config.max_generations, num_jobs)
        self.state = ControllerState.TERMINATED

        best = self.population.best_genome()
        logger.info("[EvolutionController] Done: best fitness {:.6f} ({} nodes, {} connections)",
                    best.fitness, best.node_count, len(best.conn_genes))
        return best

    def _reset(self) -> None:
        """
        Reset the run state before starting a new run.
        """
        if self._config.seed is not None:
            random.seed(self._config.seed)
            np.random.seed(self._config.seed)

        self.ledger.reset()
        self.history    = []
        self.population = None
        self.state      = ControllerState.UNINITIALIZED

    def _evaluate_all(self, generation: int, num_jobs: int) -> None:
        """
        Evaluate the fitness of every genome in the population and record the
        generation's statistics.

        Raises:
            ValueError: if the task returns a fitness that is not a finite number
        """
        self.state = ControllerState.EVALUATING
        genomes    = self.population.genomes

        if num_jobs == 1:
            fitness_all = [self._task.evaluate(genome) for genome in genomes]
        else:
            fitness_all = Parallel(num_jobs)(delayed(self._task.evaluate)(genome) for genome in genomes)

        for genome, fitness in zip(genomes, fitness_all):
            fitness = float(fitness)
            if not math.isfinite(fitness):
                raise ValueError(f"task returned a non-finite fitness ({fitness}) in generation {generation}")
            genome.fitness = fitness

        stats = GenerationStats(generation       = generation,
                                best_fitness     = max(g.fitness for g in genomes),
                                mean_fitness     = mean(g.fitness for g in genomes),
                                species_sizes    = self.population.species_sizes,
                                innovations      = self.ledger.count,
                                mean_connections = mean(len(g.conn_genes) for g in genomes))
        self.history.append(stats)

        logger.info("[EvolutionController] Generation {:4d}: best {:.6f} mean {:.6f} species {} innovations {}",
                    stats.generation, stats.best_fitness, stats.mean_fitness,
                    stats.species_sizes, stats.innovations)
