import configparser
import os

class Config:
    """
    Configuration parameters of a NEAT run.

    A Config is either populated with defaults (no file) or parsed from an INI
    file; options missing from the file keep their defaults. Attributes can be
    overridden programmatically after construction. 'validate()' checks that the
    values describe a runnable configuration.
    """

    # [SECTION] => {option => type}
    _OPTIONS = {
        'POPULATION': {
            'num_inputs'       : int,
            'num_outputs'      : int,
            'population_size'  : int,
            'bias'             : float,
            'weight_init_mean' : float,
            'weight_init_stdev': float,
        },
        'SPECIATION': {
            'num_species'          : int,
            'refinement_iterations': int,
            'kmeans_restarts'      : int,
        },
        'REPRODUCTION': {
            'elitism_proportion'   : float,
            'disable_probability'  : float,
            'fitness_tie_tolerance': float,
        },
        'MUTATION': {
            'weight_mutation_prob'    : float,
            'weight_mutation_size'    : float,
            'bias_mutation_prob'      : float,
            'bias_mutation_size'      : float,
            'node_addition_prob'      : float,
            'connection_addition_prob': float,
            'merge_innovations'       : bool,
        },
        'NETWORK': {
            'acyclic': bool,
        },
        'TERMINATION': {
            'max_generations': int,
        },
        'RUN': {
            'seed': int,
        },
    }

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config holding the defaults.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.
        """

        # [POPULATION]

        # The number of input nodes, through which the network receives inputs.
        self.num_inputs = 2

        # The number of output nodes, to which the network delivers outputs.
        self.num_outputs = 1

        # The number of genomes in each generation.
        self.population_size = 100

        # The value emitted by the bias node of a newly created genome.
        self.bias = 1.0

        # The mean and standard deviation of the normal distribution
        # used to initialize the weight of new connections.
        self.weight_init_mean  = 0.0
        self.weight_init_stdev = 1.0

        # [SPECIATION]

        # The (fixed) number of species the population is clustered into.
        self.num_species = 4

        # The maximum number of k-means iterations when re-clustering a
        # generation starting from the previous generation's centroids.
        self.refinement_iterations = 10

        # The number of k-means restarts when clustering from scratch.
        self.kmeans_restarts = 10

        # [REPRODUCTION]

        # The fraction of each species' allotted size filled by copying
        # its fittest genomes unchanged (at least one per non-empty species).
        self.elitism_proportion = 0.1

        # The probability that a gene disabled in either parent is disabled in the child.
        self.disable_probability = 0.75

        # Parents whose fitness differs by less than this are considered equally fit.
        self.fitness_tie_tolerance = 0.001

        # [MUTATION]

        # The probability that a connection weight is perturbed, and the bound
        # of the uniformly distributed perturbation.
        self.weight_mutation_prob = 0.8
        self.weight_mutation_size = 0.5

        # The probability that the bias is perturbed, and the bound
        # of the uniformly distributed perturbation.
        self.bias_mutation_prob = 0.7
        self.bias_mutation_size = 0.5

        # The probability that mutation splits a connection with a new node.
        self.node_addition_prob = 0.03

        # The probability that mutation adds a connection between existing nodes.
        self.connection_addition_prob = 0.05

        # Whether identical structural mutations made within the same
        # generation receive the same innovation numbers.
        self.merge_innovations = True

        # [NETWORK]

        # Whether networks are constrained to be feed-forward (no cycles).
        self.acyclic = True

        # [TERMINATION]

        # The number of generations to evolve.
        self.max_generations = 50

        # [RUN]

        # Seed for the random number generators (None: do not seed).
        self.seed = None

        if config_file is None:
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Helper function to safely parse values
        def get_value(section, key, value_type, default):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                return default

        for section, options in self._OPTIONS.items():
            for key, value_type in options.items():
                setattr(self, key, get_value(section, key, value_type, getattr(self, key)))

    def validate(self) -> None:
        """
        Check that the configuration describes a runnable NEAT run.

        Raises:
            ValueError: naming the first offending option
        """
        if self.num_inputs is None or self.num_inputs < 1:
            raise ValueError(f"num_inputs must be at least 1, got {self.num_inputs}")
        if self.num_outputs is None or self.num_outputs < 1:
            raise ValueError(f"num_outputs must be at least 1, got {self.num_outputs}")
        if self.population_size is None or self.population_size < 1:
            raise ValueError(f"population_size must be at least 1, got {self.population_size}")
        if self.num_species is None or self.num_species < 1:
            raise ValueError(f"num_species must be at least 1, got {self.num_species}")
        if self.num_species > self.population_size:
            raise ValueError(f"num_species ({self.num_species}) exceeds population_size ({self.population_size})")
        if self.max_generations is None or self.max_generations < 0:
            raise ValueError(f"max_generations must be non-negative, got {self.max_generations}")
        if self.refinement_iterations < 1:
            raise ValueError(f"refinement_iterations must be at least 1, got {self.refinement_iterations}")
        if self.kmeans_restarts < 1:
            raise ValueError(f"kmeans_restarts must be at least 1, got {self.kmeans_restarts}")

        for name in ('elitism_proportion', 'disable_probability', 'weight_mutation_prob',
                     'bias_mutation_prob', 'node_addition_prob', 'connection_addition_prob'):
            value = getattr(self, name)
            if value is None or not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {value}")

        for name in ('weight_mutation_size', 'bias_mutation_size', 'weight_init_stdev', 'fitness_tie_tolerance'):
            value = getattr(self, name)
            if value is None or value < 0.0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    def __repr__(self):
        options = ', '.join(f"{key}={getattr(self, key)!r}"
                            for section in self._OPTIONS.values() for key in section)
        return f"Config({options})"
