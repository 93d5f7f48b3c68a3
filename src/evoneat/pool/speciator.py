"""
NEAT Speciator Module

This module implements the Speciator class, which splits a generation of genomes
into a fixed number of species by clustering them.

Speciation in NEAT:
New structural innovations usually have a lower initial fitness and would be
eliminated quickly if they competed against the whole population. Grouping
genomes with similar evolutionary history into species, and sharing fitness
within each species, gives novel structures time to optimize.

How genomes are clustered:
Every genome is a point in an innovation-indexed space. The space has one
dimension per innovation number issued so far; the coordinate 'k' of a genome
is the weight of its connection gene with innovation number 'k', or 0 if the
genome has no such gene. The points are clustered with k-means into a fixed
number of clusters. The first clustering starts from scratch; later ones start
from the previous generation's centroids and run a bounded number of iterations,
so species keep their identity from one generation to the next.

Classes:
    Speciator: Clusters genomes into species with k-means
"""

import warnings
import numpy as np
from loguru              import logger
from sklearn.cluster     import KMeans
from sklearn.exceptions  import ConvergenceWarning
from typing              import TYPE_CHECKING

if TYPE_CHECKING:
    from evoneat.genotype import Genome
    from evoneat.run.config import Config

class Speciator:
    """
    Partitions the genomes of a generation into 'num_species' species.

    Public Attributes:
        centroids: Cluster centroids of the most recent clustering (None before the first)

    Public Methods:
        speciate(genomes, dimension, init): Assign every genome to a species
        to_points(genomes, dimension):      Embed genomes in innovation-indexed space
    """

    def __init__(self, config: 'Config'):
        """
        Parameters:
            config: Stores configuration parameters
        """
        self._config  = config
        self.centroids: np.ndarray | None = None

    @staticmethod
    def to_points(genomes: list['Genome'], dimension: int) -> np.ndarray:
        """
        Represent each genome as a point in innovation-indexed space.

        Parameters:
            genomes:   the genomes to embed
            dimension: number of innovation numbers issued so far

        Returns:
            array of shape (len(genomes), dimension)
        """
        points = np.zeros((len(genomes), dimension))
        for row, genome in enumerate(genomes):
            for gene in genome.conn_genes.values():
                points[row, gene.innovation] = gene.weight
        return points

    def speciate(self, genomes: list['Genome'], dimension: int, init: bool) -> list[list[int]]:
        """
        Assign every genome to one of 'num_species' species.

        Parameters:
            genomes:   the genomes of the current generation
            dimension: number of innovation numbers issued so far
            init:      cluster from scratch (True) or refine the previous centroids (False)

        Returns:
            for each species, the indices (into 'genomes') of its members;
            a species may be empty
        """
        num_species = self._config.num_species
        points      = self.to_points(genomes, dimension)

        if init or self.centroids is None:
            kmeans = KMeans(n_clusters   = num_species,
                            n_init       = self._config.kmeans_restarts,
                            random_state = np.random.randint(0, 2**31 - 1))
        else:
            kmeans = KMeans(n_clusters = num_species,
                            init       = self._seed_centroids(dimension),
                            n_init     = 1,
                            max_iter   = self._config.refinement_iterations)

        # Fewer distinct points than clusters is a legitimate outcome (e.g. when
        # mutation is switched off); it shows up as empty species below.
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", ConvergenceWarning)
            labels = kmeans.fit_predict(points)
        self.centroids = kmeans.cluster_centers_

        species = [[] for _ in range(num_species)]
        for index, label in enumerate(labels):
            species[int(label)].append(index)

        empty = [spec_id for spec_id, members in enumerate(species) if not members]
        if empty:
            logger.warning("[Speciator] {} empty species after clustering: {}", len(empty), empty)
        logger.debug("[Speciator] species sizes: {}", [len(members) for members in species])

        return species

    def _seed_centroids(self, dimension: int) -> np.ndarray:
        """
        The previous centroids, padded with zeros along the dimensions
        of innovation numbers issued since the last clustering.
        """
        missing = dimension - self.centroids.shape[1]
        if missing > 0:
            return np.pad(self.centroids, ((0, 0), (0, missing)))
        return self.centroids
