"""
Unit tests for the Network class (phenotype evaluation of a genome).
"""

import math
import pytest

from evoneat.genotype   import Genome, InnovationLedger, InnovationRegistry
from evoneat.phenotype  import Network
from evoneat.run.config import Config


# ============================================================================
# Test Fixtures
# ============================================================================

def identity(x):
    return x


def make_config(num_inputs, num_outputs, acyclic=True):
    config = Config()
    config.num_inputs  = num_inputs
    config.num_outputs = num_outputs
    config.acyclic     = acyclic
    return config


def make_genome(config, node_count, connections, bias=1.0):
    """Build a genome from (source, target, weight[, enabled]) tuples."""
    genes = []
    for innov, conn in enumerate(connections):
        source, target, weight = conn[:3]
        enabled = conn[3] if len(conn) > 3 else True
        genes.append({"innovation": innov, "from": source, "to": target, "weight": weight, "enabled": enabled})
    return Genome.from_dict({"node_count": node_count, "bias": bias, "connections": genes}, config)


# ============================================================================
# Test: Feed-forward Networks
# ============================================================================

class TestAcyclicNetwork:
    """Nodes: 0, 1 = inputs; 2 = bias; 3 = output; 4+ = hidden."""

    @pytest.fixture
    def config(self):
        return make_config(2, 1)

    def test_weighted_sum(self, config):
        genome  = make_genome(config, 4, [(0, 3, 0.5), (1, 3, -2.0), (2, 3, 0.25)])
        network = Network(genome, identity)
        assert network.activate([1.0, 2.0]) == [pytest.approx(0.5 - 4.0 + 0.25)]

    def test_bias_value(self, config):
        genome  = make_genome(config, 4, [(2, 3, 2.0)], bias=0.5)
        network = Network(genome, identity)
        assert network.activate([7.0, 7.0]) == [pytest.approx(1.0)]

    def test_hidden_node(self, config):
        genome  = make_genome(config, 5, [(0, 4, 2.0), (4, 3, 3.0), (1, 3, 1.0)])
        network = Network(genome, identity)
        assert network.activate([1.0, 0.5]) == [pytest.approx(6.5)]

    def test_deep_chain_evaluated_in_one_pass(self, config):
        """Test that hidden nodes are evaluated before the nodes they feed."""
        # 0 -> 6 -> 5 -> 4 -> 3, hidden nodes numbered against the flow
        genome  = make_genome(config, 7, [(0, 6, 2.0), (6, 5, 2.0), (5, 4, 2.0), (4, 3, 2.0)])
        network = Network(genome, identity)
        assert network.activate([1.0, 0.0]) == [pytest.approx(16.0)]

    def test_disabled_connections_ignored(self, config):
        genome  = make_genome(config, 4, [(0, 3, 1.0), (1, 3, 5.0, False)])
        network = Network(genome, identity)
        assert network.activate([1.0, 1.0]) == [pytest.approx(1.0)]

    def test_activation_applied(self, config):
        genome  = make_genome(config, 4, [(0, 3, 1.0)])
        network = Network(genome, math.tanh)
        assert network.activate([0.5, 0.0]) == [pytest.approx(math.tanh(0.5))]

    def test_unconnected_output(self, config):
        """Test that an output without incoming connections outputs activation(0)."""
        genome  = make_genome(config, 4, [])
        network = Network(genome, lambda x: x + 0.5)
        assert network.activate([1.0, 1.0]) == [pytest.approx(0.5)]

    def test_no_state_between_calls(self, config):
        genome  = make_genome(config, 5, [(0, 4, 1.0), (4, 3, 1.0)])
        network = Network(genome, identity)
        assert network.activate([3.0, 0.0]) == network.activate([3.0, 0.0])

    def test_multiple_outputs(self):
        config  = make_config(1, 2)
        genome  = make_genome(config, 4, [(0, 2, 1.0), (0, 3, -1.0)])
        network = Network(genome, identity)
        assert network.activate([2.0]) == [pytest.approx(2.0), pytest.approx(-2.0)]

    def test_minimal_genome(self, config):
        """Test evaluating a freshly created genome."""
        genome  = Genome(config, InnovationRegistry(InnovationLedger()))
        network = Network(genome, identity)
        weights = [gene.weight for gene in genome.connection_genes]
        assert network.activate([1.0, 1.0]) == [pytest.approx(sum(weights))]

    @pytest.mark.parametrize("inputs", [[], [1.0], [1.0, 2.0, 3.0]])
    def test_wrong_number_of_inputs(self, config, inputs):
        genome  = make_genome(config, 4, [(0, 3, 1.0)])
        network = Network(genome, identity)
        with pytest.raises(ValueError, match="Expected 2 inputs"):
            network.activate(inputs)


# ============================================================================
# Test: Recurrent Networks
# ============================================================================

class TestRecurrentNetwork:
    """Nodes: 0 = input; 1 = bias; 2 = output; 3+ = hidden."""

    @pytest.fixture
    def config(self):
        return make_config(1, 1, acyclic=False)

    def test_self_loop_accumulates(self, config):
        genome  = make_genome(config, 3, [(0, 2, 1.0), (2, 2, 0.5)])
        network = Network(genome, identity)

        assert network.activate([1.0]) == [pytest.approx(1.0)]
        assert network.activate([1.0]) == [pytest.approx(1.5)]
        assert network.activate([1.0]) == [pytest.approx(1.75)]

    def test_synchronous_update(self, config):
        """Test that a signal advances one connection per call."""
        genome  = make_genome(config, 4, [(0, 3, 1.0), (3, 2, 1.0)])
        network = Network(genome, identity)

        assert network.activate([1.0]) == [pytest.approx(0.0)]
        assert network.activate([1.0]) == [pytest.approx(1.0)]

    def test_reset(self, config):
        genome  = make_genome(config, 3, [(0, 2, 1.0), (2, 2, 0.5)])
        network = Network(genome, identity)

        network.activate([1.0])
        network.activate([1.0])
        network.reset()
        assert network.activate([1.0]) == [pytest.approx(1.0)]

    def test_cycle_through_hidden_node(self, config):
        genome  = make_genome(config, 4, [(0, 3, 1.0), (3, 2, 1.0), (2, 3, 1.0)])
        network = Network(genome, identity)

        outputs = [network.activate([1.0])[0] for _ in range(4)]
        assert outputs == [pytest.approx(v) for v in (0.0, 1.0, 1.0, 2.0)]
