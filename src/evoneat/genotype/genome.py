"""
NEAT Genome Module

This module implements the Genome class for the NEAT
(NeuroEvolution of Augmenting Topologies) algorithm.

Classes:
    Genome: Complete genome representing a neural network structure
"""

import random
from collections import deque
from typing      import TYPE_CHECKING

from evoneat.genotype.connection_gene import ConnectionGene
if TYPE_CHECKING:
    from evoneat.genotype.innovation_ledger import InnovationRegistry
    from evoneat.run.config import Config

class Genome:
    """
    A NEAT genome representing a neural network as a collection of connection genes.

    In the NEAT (NeuroEvolution of Augmenting Topologies) algorithm, a genome encodes
    the structure and parameters of a neural network at the genotype level. Nodes are
    implicit: they are densely numbered, and the genome only records how many there
    are. Each connection gene carries a unique innovation number used to align genes
    of different genomes during crossover.

    A minimal genome connects every input node directly to every output node. Via
    mutation, genomes grow by adding nodes (splitting a connection) and connections.
    If the configuration asks for acyclic networks, the genome tracks the depth of
    every node and only ever adds forward connections.

    Node numbering convention:
        - Input nodes:  [0, num_inputs)
        - Bias node:    num_inputs
        - Output nodes: [num_inputs + 1, num_inputs + 1 + num_outputs)
        - Hidden nodes: [num_inputs + 1 + num_outputs, node_count)

    Public Attributes:
        conn_genes:  Dictionary mapping innovation numbers to ConnectionGene objects,
                     kept in ascending innovation order
        node_count:  Total number of nodes (input, bias, output and hidden)
        node_depths: Depth of every node (acyclic genomes only, empty otherwise)
        bias:        Value emitted by the bias node
        fitness:     Fitness assigned by the task (None until evaluated)

    Public Properties:
        connection_genes: Connection genes as a list, in ascending innovation order
        num_inputs, num_outputs, bias_node, output_nodes, hidden_nodes, acyclic

    Public Methods:
        mutate(innovations): Apply all mutation operations stochastically
        to_dict():           Convert genome to dictionary representation

    Class Methods:
        from_genes(config, genes, node_count, bias): Build a genome from existing genes
        from_dict(genome_dict, config):              Create a genome from a dictionary
    """

    def __init__(self, config: 'Config', innovations: 'InnovationRegistry'):
        """
        Initialize a minimal Genome.

        The minimal network consists of the input nodes, the bias node and the
        output nodes, with every input connected directly to every output.
        Connection weights are drawn from a normal distribution.

        Parameters:
            config:      Stores configuration parameters
            innovations: Issues innovation numbers for the initial connections

        Raises:
            ValueError: if the configuration asks for no input or no output nodes
        """
        if config.num_inputs < 1:
            raise ValueError(f"a genome needs at least one input node (num_inputs={config.num_inputs})")
        if config.num_outputs < 1:
            raise ValueError(f"a genome needs at least one output node (num_outputs={config.num_outputs})")

        self._config    = config
        self.conn_genes : dict[int, ConnectionGene] = {}   # innovation number => connection gene
        self.node_count : int          = config.num_inputs + 1 + config.num_outputs
        self.node_depths: list[int]    = []
        self.bias       : float        = config.bias
        self.fitness    : float | None = None

        for source in range(self.num_inputs):
            for target in self.output_nodes:
                innovation = innovations.connection_innovation(source, target)
                weight     = random.gauss(config.weight_init_mean, config.weight_init_stdev)
                self.conn_genes[innovation] = ConnectionGene(source, target, weight, innovation)

        self._sort_genes()
        self._update_depths()

    @classmethod
    def from_genes(cls,
                   config    : 'Config',
                   genes     : list[ConnectionGene],
                   node_count: int,
                   bias      : float) -> 'Genome':
        """
        Create a genome from a list of connection genes (used by crossover).
        The genes are copied, so the new genome owns its genes exclusively.

        Parameters:
            config:     Stores configuration parameters
            genes:      the connection genes of the new genome
            node_count: total number of nodes in the new genome
            bias:       value emitted by the bias node

        Returns:
            the new genome (fitness not evaluated)
        """
        genome = cls.__new__(cls)
        genome._config     = config
        genome.conn_genes  = {gene.innovation: gene.copy() for gene in genes}
        genome.node_count  = node_count
        genome.node_depths = []
        genome.bias        = bias
        genome.fitness     = None
        genome._sort_genes()
        genome._update_depths()
        return genome

    @classmethod
    def from_dict(cls, genome_dict: dict, config: 'Config') -> 'Genome':
        """
        Create a Genome from a dictionary description (the inverse of 'to_dict').

        Dictionary format:
            {
                "node_count": 5,
                "bias": 1.0,
                "fitness": 3.2,             # optional
                "connections": [
                    {"innovation": 0, "from": 0, "to": 3, "weight": 0.5, "enabled": true},
                    {"innovation": 4, "from": 0, "to": 4, "weight": 1.0, "enabled": true},
                    {"innovation": 5, "from": 4, "to": 3, "weight": 0.5, "enabled": true}
                ]
            }

        Parameters:
            genome_dict: Dictionary describing the genome structure
            config:      Stores configuration parameters (input/output counts, acyclicity)

        Returns:
            A new Genome object with the specified structure

        Raises:
            ValueError: If the structure is invalid (missing nodes, duplicate innovations, cycles)
            KeyError:   If required fields are missing from the dictionary
        """
        node_count = genome_dict["node_count"]
        min_nodes  = config.num_inputs + 1 + config.num_outputs
        if node_count < min_nodes:
            raise ValueError(f"node_count {node_count} is smaller than the {min_nodes} input, bias and output nodes")

        genes = []
        for conn_data in genome_dict.get("connections", []):
            source = conn_data["from"]
            target = conn_data["to"]
            for node_id in (source, target):
                if not 0 <= node_id < node_count:
                    raise ValueError(f"Connection references non-existent node: {node_id}")
            if target <= config.num_inputs:
                raise ValueError(f"Connection {source} => {target} ends at an input or bias node")
            genes.append(ConnectionGene(source, target,
                                        conn_data["weight"],
                                        conn_data["innovation"],
                                        conn_data.get("enabled", True)))

        innovations = [gene.innovation for gene in genes]
        if len(innovations) != len(set(innovations)):
            raise ValueError("Duplicate innovation numbers found in connection list")

        try:
            genome = cls.from_genes(config, genes, node_count, genome_dict.get("bias", config.bias))
        except RuntimeError as e:
            raise ValueError(str(e)) from e
        genome.fitness = genome_dict.get("fitness")
        return genome

    def to_dict(self) -> dict:
        """
        Convert the genome to a dictionary representation (see 'from_dict' for the format).
        """
        return {
            "node_count" : self.node_count,
            "bias"       : self.bias,
            "fitness"    : self.fitness,
            "connections": [{"innovation": gene.innovation,
                             "from"      : gene.source,
                             "to"        : gene.target,
                             "weight"    : gene.weight,
                             "enabled"   : gene.enabled}
                            for gene in self.connection_genes]
        }

    def copy(self) -> 'Genome':
        """
        Return an independent copy of this genome (genes copied by value, fitness preserved).
        """
        genome = Genome.from_genes(self._config, self.connection_genes, self.node_count, self.bias)
        genome.fitness = self.fitness
        return genome

    @property
    def num_inputs(self) -> int:
        return self._config.num_inputs

    @property
    def num_outputs(self) -> int:
        return self._config.num_outputs

    @property
    def bias_node(self) -> int:
        return self._config.num_inputs

    @property
    def output_nodes(self) -> range:
        first = self._config.num_inputs + 1
        return range(first, first + self._config.num_outputs)

    @property
    def hidden_nodes(self) -> range:
        return range(self._config.num_inputs + 1 + self._config.num_outputs, self.node_count)

    @property
    def acyclic(self) -> bool:
        return self._config.acyclic

    @property
    def connection_genes(self) -> list[ConnectionGene]:
        return list(self.conn_genes.values())

    def mutate(self, innovations: 'InnovationRegistry') -> None:
        """
        Apply to the current genome all possible mutation operations.

        Each mutation occurs independently, with its own probability:
          + perturb each connection weight
          + perturb the bias
          + add a node (splitting an enabled connection)
          + add a connection between two unconnected nodes
        Structural mutations draw their innovation numbers from 'innovations'.

        Parameters:
            innovations: registry of the structural mutations of the current generation
        """
        config = self._config

        for gene in self.conn_genes.values():
            gene.perturb(config.weight_mutation_prob, config.weight_mutation_size)

        if random.random() < config.bias_mutation_prob:
            self.bias += random.uniform(-config.bias_mutation_size, config.bias_mutation_size)

        if random.random() < config.node_addition_prob:
            self._mutate_add_node(innovations)

        if random.random() < config.connection_addition_prob:
            self._mutate_add_connection(innovations)

    def _mutate_add_node(self, innovations: 'InnovationRegistry') -> bool:
        """
        Split an enabled connection in two by inserting a new (hidden) node.

        The split connection is disabled. The connection entering the new node
        gets weight 1.0 and the connection leaving it inherits the old weight,
        so the signal reaching the old target is initially unchanged (up to the
        activation of the new node).

        Returns:
            whether the genome was changed
        """
        enabled_genes = [gene for gene in self.conn_genes.values() if gene.enabled]
        if not enabled_genes:
            return False
        split_gene = random.choice(enabled_genes)
        split_gene.enabled = False

        # The new node is fresh, so neither new connection can already be in the genome
        new_node = self.node_count
        innov1, innov2 = innovations.split_innovations(split_gene, new_node)

        self.node_count += 1
        self.conn_genes[innov1] = ConnectionGene(split_gene.source, new_node, 1.0, innov1)
        self.conn_genes[innov2] = ConnectionGene(new_node, split_gene.target, split_gene.weight, innov2)

        self._sort_genes()
        self._update_depths()
        return True

    def _mutate_add_connection(self, innovations: 'InnovationRegistry') -> bool:
        """
        Add a new connection between two nodes not yet directly connected.

        The new connection can never end at an input or at the bias node.
        In acyclic genomes it can only go from a shallower to a deeper node
        (which also rules out starting at an output node); in cyclic genomes
        any other pair is allowed, including self-loops.

        Returns:
            whether the genome was changed
        """
        connected = {(gene.source, gene.target) for gene in self.conn_genes.values()}
        outputs   = self.output_nodes
        targets   = range(self.num_inputs + 1, self.node_count)

        candidates = []
        for source in range(self.node_count):
            if self.acyclic and source in outputs:
                continue
            for target in targets:
                if (source, target) in connected:
                    continue
                if self.acyclic and self.node_depths[source] >= self.node_depths[target]:
                    continue
                candidates.append((source, target))

        if not candidates:
            return False
        source, target = random.choice(candidates)

        innovation = innovations.connection_innovation(source, target)
        if innovation in self.conn_genes:
            innovation = innovations.ledger.next_id()
        weight = random.gauss(self._config.weight_init_mean, self._config.weight_init_stdev)
        self.conn_genes[innovation] = ConnectionGene(source, target, weight, innovation)

        self._sort_genes()
        self._update_depths()
        return True

    def _sort_genes(self) -> None:
        self.conn_genes = dict(sorted(self.conn_genes.items()))

    def _update_depths(self) -> None:
        """
        Recompute the depth of every node (acyclic genomes only).

        Inputs and the bias node have depth 0. Any other node is one deeper
        than its deepest predecessor, counting disabled connections too, or
        has depth 1 if nothing connects into it.

        Raises:
            RuntimeError: if the connections contain a cycle
        """
        if not self.acyclic:
            self.node_depths = []
            return

        successors = [[] for _ in range(self.node_count)]
        in_degree  = [0] * self.node_count
        for gene in self.conn_genes.values():
            successors[gene.source].append(gene.target)
            in_degree[gene.target] += 1

        depths = [0 if node <= self.bias_node else 1 for node in range(self.node_count)]
        queue  = deque(node for node in range(self.node_count) if in_degree[node] == 0)
        visited = 0
        while queue:
            node = queue.popleft()
            visited += 1
            for succ in successors[node]:
                depths[succ] = max(depths[succ], depths[node] + 1)
                in_degree[succ] -= 1
                if in_degree[succ] == 0:
                    queue.append(succ)

        if visited < self.node_count:
            raise RuntimeError("connection genes of an acyclic genome contain a cycle")
        self.node_depths = depths

    def __str__(self):
        conn_genes_str = ''.join(str(conn) for conn in self.conn_genes.values())
        return f"Nodes: {self.node_count} Bias: {self.bias:+.02f}\nConns: {conn_genes_str}"
