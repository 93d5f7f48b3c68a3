#!/usr/bin/env python3
"""
Utility script to run NEAT examples easily.

Usage:
    python scripts/run_example.py xor
    python scripts/run_example.py xor --num-jobs 4 --log-level DEBUG --output best.json
"""

import sys
import argparse
import json
from pathlib import Path
from loguru  import logger

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from evoneat import Config, EvolutionController
from examples.task_XOR import Task_XOR


EXAMPLES = {
    'xor': {
        'task': Task_XOR,
        'config': 'examples/configs/config_xor.ini',
        'description': 'XOR logic problem'
    },
}


def main():
    parser = argparse.ArgumentParser(description='Run NEAT examples')
    parser.add_argument('example', choices=EXAMPLES.keys(),
                        help='Example to run')
    parser.add_argument('--config', default=None,
                        help='Configuration file (default: the example\'s own)')
    parser.add_argument('--num-jobs', type=int, default=1,
                        help='Number of parallel jobs for fitness evaluation')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed for the random number generators')
    parser.add_argument('--log-level', default='INFO',
                        choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Minimum level of the messages shown')
    parser.add_argument('--output', default=None,
                        help='Save the best genome to this JSON file')

    args = parser.parse_args()

    logger.remove()
    logger.add(sys.stderr, level=args.log_level)

    example = EXAMPLES[args.example]
    logger.info("Running {}...", example['description'])

    config = Config(args.config or example['config'])
    if args.seed is not None:
        config.seed = args.seed

    task = example['task']()
    best = EvolutionController(task, config).train(num_jobs=args.num_jobs)
    task.report(best)

    if args.output:
        with open(args.output, 'w') as f:
            json.dump(best.to_dict(), f, indent=2)
        logger.info("Best genome saved to '{}'", args.output)


if __name__ == '__main__':
    main()
