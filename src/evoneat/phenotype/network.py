"""
NEAT Network Module

This module implements the phenotype of a genome: an executable neural network
that turns input values into output values.

Classes:
    Network: Forward (or recurrent) evaluation of a genome
"""

from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from evoneat.genotype import Genome

ActivationFunction = Callable[[float], float]

class Network:
    """
    The neural network encoded by a genome.

    Input nodes pass their input through unchanged and the bias node emits the
    genome's bias value. Hidden and output nodes compute:
        output = activation(sum of weight * source_output over enabled incoming connections)

    Acyclic genomes are evaluated in a single pass, visiting the nodes in order of
    increasing depth. Cyclic genomes are evaluated as recurrent networks: every call
    to 'activate' performs one synchronous update in which each node reads the node
    outputs of the previous call. 'reset' clears that state.

    The network reads the genome at construction time; later changes to the
    genome are not reflected.

    Public Methods:
        activate(inputs): Propagate the inputs and return the output values
        reset():          Zero the state of a recurrent network
    """

    def __init__(self, genome: 'Genome', activation: ActivationFunction):
        """
        Parameters:
            genome:     The genome encoding the network
            activation: Applied at every hidden and output node
        """
        self._activation  = activation
        self._num_inputs  = genome.num_inputs
        self._bias_node   = genome.bias_node
        self._bias        = genome.bias
        self._output_ids  = list(genome.output_nodes)
        self._acyclic     = genome.acyclic
        self._node_count  = genome.node_count

        # node => list of (source, weight), enabled connections only
        self._incoming: list[list[tuple[int, float]]] = [[] for _ in range(genome.node_count)]
        for gene in genome.conn_genes.values():
            if gene.enabled:
                self._incoming[gene.target].append((gene.source, gene.weight))

        # Nodes computed by the network, inputs and bias excluded
        computed = range(self._bias_node + 1, genome.node_count)
        if self._acyclic:
            self._order = sorted(computed, key=lambda node: genome.node_depths[node])
        else:
            self._order = list(computed)

        self._values: list[float] = [0.0] * genome.node_count

    def activate(self, inputs: list[float]) -> list[float]:
        """
        Propagate a set of input values through the network.

        Parameters:
            inputs: one value per input node

        Returns:
            one value per output node

        Raises:
            ValueError: if the number of inputs does not match the number of input nodes
        """
        if len(inputs) != self._num_inputs:
            raise ValueError(f"Expected {self._num_inputs} inputs, got {len(inputs)}")

        # A recurrent network starts from the node outputs of the previous call
        values = [0.0] * self._node_count if self._acyclic else list(self._values)
        values[:self._num_inputs] = [float(x) for x in inputs]
        values[self._bias_node]   = self._bias

        # Acyclic: read the values computed in this pass. Recurrent: read a snapshot.
        source_values = values if self._acyclic else list(values)

        for node in self._order:
            weighted_input = sum(weight * source_values[source] for source, weight in self._incoming[node])
            values[node] = self._activation(weighted_input)

        self._values = values
        return [values[node] for node in self._output_ids]

    def reset(self) -> None:
        self._values = [0.0] * self._node_count

    def __repr__(self):
        return f"Network(nodes={self._node_count}, outputs={self._output_ids})"
