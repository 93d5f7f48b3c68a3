"""
XOR Problem Implementation for NEAT

This module implements the classic XOR (exclusive OR) problem as a benchmark
for the NEAT algorithm. XOR is not linearly separable, so a network must grow
at least one hidden node to solve it.

The XOR Problem:
    Input (0, 0) → Output 0
    Input (0, 1) → Output 1
    Input (1, 0) → Output 1
    Input (1, 1) → Output 0

Fitness Function:
    Fitness = 4.0 - Σ(output - target)²

    Maximum fitness of 4.0 is achieved when all four XOR cases produce exact outputs.

Classes:
    Task_XOR: NEAT task for solving XOR

Usage:
    config = Config("examples/configs/config_xor.ini")
    best   = EvolutionController(Task_XOR(), config).train(num_jobs=1)
"""

import math
from loguru import logger

from evoneat.genotype  import Genome
from evoneat.phenotype import Network
from evoneat.run       import Task

def sigmoid(x: float) -> float:
    """Steepened logistic function, as in the original NEAT XOR experiments."""
    return 1.0 / (1.0 + math.exp(-4.9 * max(-60.0, min(60.0, x))))

class Task_XOR(Task):
    """
    NEAT task for solving the XOR (exclusive OR) problem.

    Problem Definition:
        Inputs: 2 binary values (0 or 1)
        Output: 1 value in (0, 1), the XOR of the inputs
        Training cases: All 4 possible input combinations

    Implemented Methods:
        evaluate(genome): Test the genome's network on all 4 XOR cases
        report(genome):   Log the truth table produced by a genome
    """

    xor_inputs  = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
    xor_outputs = [0.0,        1.0,        1.0,        0.0]

    def evaluate(self, genome: Genome) -> float:
        network = Network(genome, sigmoid)

        fitness = 4.0  # max possible fitness
        for inputs, expected_output in zip(self.xor_inputs, self.xor_outputs):
            output   = network.activate(inputs)[0]
            fitness -= (output - expected_output) ** 2
        return fitness

    def report(self, genome: Genome) -> None:
        """
        Log the output of a genome's network for every XOR case.
        """
        network = Network(genome, sigmoid)

        s  = "input         output   target  error\n"
        s += "------------------------------------\n"
        for inputs, target in zip(self.xor_inputs, self.xor_outputs):
            output = network.activate(inputs)[0]
            s += f"{inputs} -> {output:.4f}    {target}   {abs(output - target):.4f}\n"
        logger.info("[Task_XOR] fitness {:.4f}, {} nodes\n{}\n{}", genome.fitness, genome.node_count, genome, s)
