"""
Integration tests for basic NEAT evolution.

These tests run the evolution controller end-to-end on small problems.
They use fixed random seeds for reproducibility.
"""

import math
import pytest

from evoneat.genotype   import Genome
from evoneat.phenotype  import Network
from evoneat.pool       import Population
from evoneat.run        import EvolutionController, Task
from evoneat.run.config import Config


def sigmoid(x):
    return 1.0 / (1.0 + math.exp(-4.9 * max(-60.0, min(60.0, x))))


# ============================================================================
# Helper Tasks
# ============================================================================

class TaskXORTest(Task):
    """Simplified XOR task for integration testing."""

    def __init__(self, xor_inputs, xor_outputs):
        self.xor_inputs  = xor_inputs
        self.xor_outputs = xor_outputs

    def evaluate(self, genome: Genome) -> float:
        network = Network(genome, sigmoid)
        fitness = 4.0
        for inputs, expected_output in zip(self.xor_inputs, self.xor_outputs):
            fitness -= (network.activate(inputs)[0] - expected_output) ** 2
        return fitness


class TaskOutputTarget(Task):
    """Rewards networks whose output is close to 0.8 for the input (1, 1)."""

    def evaluate(self, genome: Genome) -> float:
        output = Network(genome, sigmoid).activate([1.0, 1.0])[0]
        return 1.0 - abs(output - 0.8)


# ============================================================================
# Test Fixtures
# ============================================================================

@pytest.fixture
def frozen_config():
    """10 genomes, 2 species, 3 generations, every mutation switched off."""
    config = Config()
    config.num_inputs               = 2
    config.num_outputs              = 1
    config.population_size          = 10
    config.num_species              = 2
    config.max_generations          = 3
    config.weight_mutation_prob     = 0.0
    config.bias_mutation_prob       = 0.0
    config.node_addition_prob       = 0.0
    config.connection_addition_prob = 0.0
    config.seed                     = 42
    return config


@pytest.fixture
def xor_config():
    config = Config()
    config.num_inputs               = 2
    config.num_outputs              = 1
    config.population_size          = 60
    config.num_species              = 3
    config.max_generations          = 15
    config.node_addition_prob       = 0.1
    config.connection_addition_prob = 0.2
    config.seed                     = 42
    return config


# ============================================================================
# Test Basic Evolution
# ============================================================================

@pytest.mark.integration
class TestFrozenEvolution:
    """A run without mutation only recombines the initial weights."""

    def test_topology_unchanged(self, frozen_config, xor_inputs, xor_outputs):
        controller = EvolutionController(TaskXORTest(xor_inputs, xor_outputs), frozen_config)
        best = controller.train()

        assert len(best.conn_genes) == 2
        assert best.node_count == 4
        for genome in controller.population.genomes:
            assert list(genome.conn_genes) == [0, 1]
        assert controller.ledger.count == 2

    def test_best_fitness_never_decreases(self, frozen_config, xor_inputs, xor_outputs):
        controller = EvolutionController(TaskXORTest(xor_inputs, xor_outputs), frozen_config)
        best = controller.train()

        best_per_generation = [stats.best_fitness for stats in controller.history]
        assert best.fitness >= best_per_generation[0]
        assert best_per_generation == sorted(best_per_generation)


@pytest.mark.integration
class TestEvolution:
    """Runs with mutation switched on."""

    def test_xor_improves(self, xor_config, xor_inputs, xor_outputs):
        controller = EvolutionController(TaskXORTest(xor_inputs, xor_outputs), xor_config)
        best = controller.train()

        assert best.fitness >= controller.history[0].best_fitness
        assert controller.ledger.count > 2
        for genome in controller.population.genomes:
            assert len(genome.node_depths) == genome.node_count

    def test_innovations_unique_per_genome(self, xor_config, xor_inputs, xor_outputs):
        controller = EvolutionController(TaskXORTest(xor_inputs, xor_outputs), xor_config)
        controller.train()

        for genome in controller.population.genomes:
            innovations = [gene.innovation for gene in genome.connection_genes]
            assert innovations == sorted(set(innovations))
            assert max(innovations) < controller.ledger.count

    def test_recurrent_run(self, xor_config, xor_inputs, xor_outputs, monkeypatch):
        """Test every generation of a recurrent run for consistent innovations and surviving species champions."""
        xor_config.acyclic = False
        pairs       = {}  # innovation => (source, target), over the whole run
        generations = []

        reproduce = Population.reproduce

        def checked_reproduce(population):
            champions = []
            for members in population.species:
                if members:
                    best = max(members, key=lambda i: population.genomes[i].fitness)
                    champions.append(population.genomes[best].to_dict())

            mutations = reproduce(population)

            offspring = [genome.to_dict() for genome in population.genomes]
            assert all(champion in offspring for champion in champions)

            for genome in population.genomes:
                for innovation, gene in genome.conn_genes.items():
                    assert gene.innovation == innovation
                    assert max(gene.source, gene.target) < genome.node_count
                    assert pairs.setdefault(innovation, (gene.source, gene.target)) == (gene.source, gene.target)
            generations.append(mutations)
            return mutations

        monkeypatch.setattr(Population, "reproduce", checked_reproduce)
        controller = EvolutionController(TaskXORTest(xor_inputs, xor_outputs), xor_config)
        best = controller.train()

        assert len(generations) == xor_config.max_generations
        assert best.fitness is not None
        assert best.node_depths == []

    def test_best_genome_serializes(self, xor_config):
        xor_config.max_generations = 5
        best = EvolutionController(TaskOutputTarget(), xor_config).train()

        restored = Genome.from_dict(best.to_dict(), xor_config)
        assert TaskOutputTarget().evaluate(restored) == pytest.approx(best.fitness)

    def test_deterministic_given_seed(self, xor_config, xor_inputs, xor_outputs):
        xor_config.max_generations = 5
        task = TaskXORTest(xor_inputs, xor_outputs)

        controller1 = EvolutionController(task, xor_config)
        best1 = controller1.train()
        controller2 = EvolutionController(task, xor_config)
        best2 = controller2.train()

        assert best1.to_dict() == best2.to_dict()
        assert controller1.ledger.count == controller2.ledger.count

    def test_parallel_matches_serial(self, xor_config, xor_inputs, xor_outputs):
        """Test that parallel evaluation gives the same run as serial evaluation."""
        xor_config.max_generations = 3
        task = TaskXORTest(xor_inputs, xor_outputs)

        serial   = EvolutionController(task, xor_config).train(num_jobs=1)
        parallel = EvolutionController(task, xor_config).train(num_jobs=2)

        assert parallel.to_dict() == serial.to_dict()
